from datetime import datetime, timedelta

from graph_messaging.models.message import EdgeRef, MessageEdge
from graph_messaging.services import aggregator

V = "0" * 32
B = "b" * 32
C = "c" * 32
T0 = datetime(2024, 5, 1, 12, 0, 0)


def edge(eid, sender, recipient, minutes, content="hi", is_read=False):
    return MessageEdge(
        id=eid * 32 if len(eid) == 1 else eid,
        senderId=sender,
        recipientId=recipient,
        content=content,
        sentTime=T0 + timedelta(minutes=minutes),
        isRead=is_read,
    )


def test_inbox_projects_received_messages_in_store_order():
    received = [edge("2", B, V, 5, content="x" * 100), edge("1", C, V, 1, is_read=True)]
    view = aggregator.inbox_view(received)

    assert list(view) == ["2" * 32, "1" * 32]
    first = view["2" * 32]
    assert first.from_ == B
    assert first.message == "x" * 70
    assert first.isRead is False
    assert view["1" * 32].isRead is True


def test_outbox_projects_sent_messages():
    view = aggregator.outbox_view([edge("1", V, B, 1, content="short")])
    record = view["1" * 32]
    assert record.to == B
    assert record.message == "short"


def test_unread_count_ignores_read_messages():
    received = [edge("1", B, V, 1), edge("2", B, V, 2, is_read=True), edge("3", C, V, 3)]
    assert aggregator.unread_count(received) == 2
    assert aggregator.unread_count([]) == 0


def test_reply_wins_over_older_sent_message():
    sent = [edge("1", V, B, 1)]
    received = [edge("2", B, V, 2)]
    summaries = aggregator.conversation_summaries(V, sent, received)

    assert len(summaries) == 1
    assert summaries[0].id == "2" * 32
    assert summaries[0].from_ == B
    assert summaries[0].to == V


def test_newest_of_several_sent_messages_wins():
    sent = [edge("1", V, B, 1), edge("2", V, B, 2)]
    summaries = aggregator.conversation_summaries(V, sent, [])

    assert [s.id for s in summaries] == ["2" * 32]
    assert summaries[0].from_ == V
    assert summaries[0].to == B


def test_sent_message_newer_than_reply_is_kept():
    sent = [edge("2", V, B, 9)]
    received = [edge("1", B, V, 3)]
    summaries = aggregator.conversation_summaries(V, sent, received)
    assert summaries[0].id == "2" * 32


def test_equal_timestamps_keep_first_seen_sent_edge():
    sent = [edge("a", V, B, 4)]
    received = [edge("b", B, V, 4)]
    summaries = aggregator.conversation_summaries(V, sent, received)
    assert summaries[0].id == "a" * 32


def test_one_summary_per_counterparty_sorted_ascending():
    sent = [edge("1", V, B, 10), edge("2", V, C, 1)]
    received = [edge("3", C, V, 5), edge("4", B, V, 2)]
    summaries = aggregator.conversation_summaries(V, sent, received)

    assert [s.id for s in summaries] == ["3" * 32, "1" * 32]
    times = [s.sentTime for s in summaries]
    assert times == sorted(times)


def test_summary_order_breaks_timestamp_ties_by_id():
    sent = [edge("f", V, B, 7), edge("1", V, C, 7)]
    summaries = aggregator.conversation_summaries(V, sent, [])
    assert [s.id for s in summaries] == ["1" * 32, "f" * 32]


def test_summary_keeps_read_flag_and_preview():
    received = [edge("1", B, V, 1, content="y" * 80, is_read=True)]
    summary = aggregator.conversation_summaries(V, [], received)[0]
    assert summary.isRead is True
    assert summary.message == "y" * 70


def test_conversation_record_orients_from_viewer():
    outgoing = EdgeRef("1" * 32, V, "full text " * 20, T0)
    incoming = EdgeRef("2" * 32, B, "back", T0)

    mine = aggregator.conversation_record(V, B, outgoing)
    theirs = aggregator.conversation_record(V, B, incoming)

    assert (mine.from_, mine.to) == (V, B)
    assert (theirs.from_, theirs.to) == (B, V)
    assert mine.message == "full text " * 20
    assert mine.isRead is True and theirs.isRead is True
