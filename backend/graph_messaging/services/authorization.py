"""Send eligibility and per-message viewer checks.

Both checks are pure decisions over data the caller already holds; they never
touch the store.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from graph_messaging.errors import (
    EmptyMessage,
    MessageNotAssociatedWithViewer,
    SelfMessageNotAllowed,
    SenderRequiredForAnonymous,
)
from graph_messaging.models.message import MessageEdge


@dataclass(frozen=True)
class AuthenticatedSender:
    node_id: str


@dataclass(frozen=True)
class AnonymousSender:
    from_address: Optional[str] = None


Sender = Union[AuthenticatedSender, AnonymousSender]


class ViewerRole(str, Enum):
    SENDER = "sender"
    RECIPIENT = "recipient"


def check_send(sender: Sender, recipient_id: str, content: str) -> None:
    if isinstance(sender, AnonymousSender) and not sender.from_address:
        raise SenderRequiredForAnonymous()
    if not content:
        raise EmptyMessage()
    if isinstance(sender, AuthenticatedSender) and sender.node_id == recipient_id:
        raise SelfMessageNotAllowed()


def authorize_viewer(viewer_id: str, edge: MessageEdge) -> ViewerRole:
    if viewer_id == edge.recipientId:
        return ViewerRole.RECIPIENT
    if viewer_id == edge.senderId:
        return ViewerRole.SENDER
    raise MessageNotAssociatedWithViewer(edge.id)


def marks_read_on_fetch(role: ViewerRole) -> bool:
    """Only the recipient's own fetch flips the read flag."""
    return role is ViewerRole.RECIPIENT
