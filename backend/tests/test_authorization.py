from datetime import datetime

import pytest

from graph_messaging.errors import (
    EmptyMessage,
    MessageNotAssociatedWithViewer,
    SelfMessageNotAllowed,
    SenderRequiredForAnonymous,
)
from graph_messaging.models.message import MessageEdge, ReadState
from graph_messaging.services.authorization import (
    AnonymousSender,
    AuthenticatedSender,
    ViewerRole,
    authorize_viewer,
    check_send,
    marks_read_on_fetch,
)

A = "a" * 32
B = "b" * 32
C = "c" * 32


def _edge(is_read=False):
    return MessageEdge(id="e" * 32, senderId=A, recipientId=B, content="hi",
                       sentTime=datetime(2024, 1, 1), isRead=is_read)


def test_self_message_is_rejected():
    with pytest.raises(SelfMessageNotAllowed):
        check_send(AuthenticatedSender(A), A, "hello")


def test_empty_message_is_rejected():
    with pytest.raises(EmptyMessage):
        check_send(AuthenticatedSender(A), B, "")


def test_anonymous_without_address_is_rejected():
    with pytest.raises(SenderRequiredForAnonymous):
        check_send(AnonymousSender(None), B, "hello")
    with pytest.raises(SenderRequiredForAnonymous):
        check_send(AnonymousSender(""), B, "hello")


def test_eligible_sends_pass():
    check_send(AuthenticatedSender(A), B, "hello")
    check_send(AnonymousSender("someone@example.com"), B, "hello")


def test_participants_get_their_role():
    assert authorize_viewer(B, _edge()) is ViewerRole.RECIPIENT
    assert authorize_viewer(A, _edge()) is ViewerRole.SENDER


def test_outsider_is_refused():
    with pytest.raises(MessageNotAssociatedWithViewer) as exc:
        authorize_viewer(C, _edge())
    assert exc.value.status_code == 403


def test_only_recipient_fetch_marks_read():
    assert marks_read_on_fetch(ViewerRole.RECIPIENT)
    assert not marks_read_on_fetch(ViewerRole.SENDER)


def test_read_state_only_moves_forward():
    edge = _edge()
    assert edge.read_state is ReadState.UNREAD
    edge.mark_read()
    assert edge.read_state is ReadState.READ
    edge.mark_read()
    assert edge.isRead is True

    with pytest.raises(ValueError):
        edge.isRead = False
    assert edge.read_state is ReadState.READ
