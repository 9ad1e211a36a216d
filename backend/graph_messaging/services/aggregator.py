"""Derived views over a viewer's sent and received message edges.

Nothing here is persisted: inbox, outbox, conversation summaries and unread
counts are recomputed from the edge sequences on every call.
"""
from typing import Dict, Iterable, List

from graph_messaging.models.message import EdgeRef, MessageEdge
from graph_messaging.schemas.message import (
    ConversationRecord,
    InboxRecord,
    OutboxRecord,
)

PREVIEW_LENGTH = 70


def preview(content: str) -> str:
    return content[:PREVIEW_LENGTH]


def inbox_view(received: Iterable[MessageEdge]) -> Dict[str, InboxRecord]:
    return {
        m.id: InboxRecord(
            from_=m.senderId,
            message=preview(m.content),
            isRead=m.isRead,
            sentTime=m.sentTime,
        )
        for m in received
    }


def outbox_view(sent: Iterable[MessageEdge]) -> Dict[str, OutboxRecord]:
    return {
        m.id: OutboxRecord(
            to=m.recipientId,
            message=preview(m.content),
            isRead=m.isRead,
            sentTime=m.sentTime,
        )
        for m in sent
    }


def unread_count(received: Iterable[MessageEdge]) -> int:
    return sum(1 for m in received if not m.isRead)


def _fold_latest(latest: Dict[str, MessageEdge], counterparty: str, edge: MessageEdge) -> None:
    kept = latest.get(counterparty)
    # Only a strictly newer edge displaces the kept one; ties keep the first seen
    if kept is None or edge.sentTime > kept.sentTime:
        latest[counterparty] = edge


def conversation_summaries(
    viewer_id: str,
    sent: Iterable[MessageEdge],
    received: Iterable[MessageEdge],
) -> List[ConversationRecord]:
    """Most recent message per counterparty, oldest conversation first.

    Sent edges are folded before received ones, so on an exact timestamp tie
    the sent message represents the conversation. The final order breaks
    timestamp ties by message id.
    """
    latest: Dict[str, MessageEdge] = {}
    for m in sent:
        _fold_latest(latest, m.recipientId, m)
    for m in received:
        _fold_latest(latest, m.senderId, m)

    records = []
    for counterparty, m in latest.items():
        outgoing = m.senderId == viewer_id
        records.append(
            ConversationRecord(
                id=m.id,
                from_=viewer_id if outgoing else counterparty,
                to=counterparty if outgoing else viewer_id,
                message=preview(m.content),
                isRead=m.isRead,
                sentTime=m.sentTime,
            )
        )
    records.sort(key=lambda r: (r.sentTime, r.id))
    return records


def conversation_record(viewer_id: str, counterparty_id: str, ref: EdgeRef) -> ConversationRecord:
    """Project one row of a pair query; the thread was opened, so it reads as read."""
    outgoing = ref.tail_id == viewer_id
    return ConversationRecord(
        id=ref.edge_id,
        from_=viewer_id if outgoing else counterparty_id,
        to=counterparty_id if outgoing else viewer_id,
        message=ref.content,
        isRead=True,
        sentTime=ref.sentTime,
    )
