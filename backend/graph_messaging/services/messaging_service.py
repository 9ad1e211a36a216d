from typing import Dict, List

from graph_messaging.errors import StorePartialFailure
from graph_messaging.schemas.message import (
    ConversationRecord,
    FullMessageRecord,
    InboxRecord,
    OutboxRecord,
    SendResult,
)
from graph_messaging.services import aggregator
from graph_messaging.services.authorization import (
    AuthenticatedSender,
    Sender,
    authorize_viewer,
    check_send,
    marks_read_on_fetch,
)
from graph_messaging.services.email_service import Notification, postmaster_address
from graph_messaging.store.base import MessageStore
from graph_messaging.utils.identifiers import canonical_id
from graph_messaging.utils.logger import EventTypes, log_error, log_event, log_warning


class MessagingService:
    """Request-scoped entry points for sending and reading private messages.

    Holds no state of its own between calls; every read and write goes
    through the store.
    """

    def __init__(self, store: MessageStore, notifier=None):
        self.store = store
        self.notifier = notifier

    async def send(self, sender: Sender, recipient_id: str, content: str) -> SendResult:
        recipient_id = canonical_id(recipient_id, "recipient")
        authenticated = isinstance(sender, AuthenticatedSender)
        if authenticated:
            sender = AuthenticatedSender(canonical_id(sender.node_id, "sender"))
        check_send(sender, recipient_id, content)

        recipient = await self.store.resolve_node(recipient_id)

        edge = None
        if authenticated:
            sender_node = await self.store.resolve_node(sender.node_id)
            edge = await self.store.create_message_edge(sender.node_id, recipient_id, content)
            from_address = postmaster_address(sender_node.display_name)
            await log_event(EventTypes.MESSAGE_SENT, {"message_id": edge.id}, user_id=sender.node_id)
        else:
            from_address = sender.from_address
            await log_event(EventTypes.ANONYMOUS_MESSAGE_SENT, {"to": recipient_id, "from": from_address})

        if recipient.email:
            body = f"{content}\n{edge.id}" if edge else content
            await self._notify(Notification(from_address=from_address, to_address=recipient.email, body=body), recipient_id)
        else:
            log_warning(f"Recipient {recipient_id} has no email address; notification skipped")

        return SendResult(id=edge.id if edge else None)

    async def _notify(self, notification: Notification, recipient_id: str) -> None:
        if self.notifier is None:
            return
        try:
            delivered = await self.notifier.dispatch(notification)
        except Exception as e:
            log_error(f"Notification dispatch failed for {recipient_id}", e)
            delivered = False
        if not delivered:
            await log_event(EventTypes.NOTIFICATION_FAILED, {"to": recipient_id})

    async def unread_count(self, viewer_id: str) -> int:
        return aggregator.unread_count(await self.store.list_incoming_edges(viewer_id))

    async def inbox(self, viewer_id: str) -> Dict[str, InboxRecord]:
        return aggregator.inbox_view(await self.store.list_incoming_edges(viewer_id))

    async def outbox(self, viewer_id: str) -> Dict[str, OutboxRecord]:
        return aggregator.outbox_view(await self.store.list_outgoing_edges(viewer_id))

    async def conversation_summaries(self, viewer_id: str) -> List[ConversationRecord]:
        sent = await self.store.list_outgoing_edges(viewer_id)
        received = await self.store.list_incoming_edges(viewer_id)
        return aggregator.conversation_summaries(viewer_id, sent, received)

    async def conversation(self, viewer_id: str, counterparty_id: str) -> Dict[str, ConversationRecord]:
        """Whole thread with one counterparty, newest first; opening it marks every message read.

        A reference the store can no longer resolve or mark, for whatever
        reason, is logged and left out instead of failing the thread.
        """
        counterparty_id = canonical_id(counterparty_id, "with")
        refs = await self.store.query_edges_between(viewer_id, counterparty_id)

        records: Dict[str, ConversationRecord] = {}
        for ref in refs:
            try:
                await self.store.resolve_edge(ref.edge_id)
                await self.store.set_edge_read_flag(ref.edge_id)
            except Exception as e:
                failure = StorePartialFailure(ref.edge_id, cause=e)
                log_error(f"Skipped message in conversation with {counterparty_id} ({type(e).__name__})", failure, user_id=viewer_id)
                continue
            records[ref.edge_id] = aggregator.conversation_record(viewer_id, counterparty_id, ref)

        await log_event(
            EventTypes.CONVERSATION_READ,
            {"with": counterparty_id, "count": len(records)},
            user_id=viewer_id,
        )
        return records

    async def message(self, viewer_id: str, message_id: str) -> FullMessageRecord:
        message_id = canonical_id(message_id, "message ID")
        edge = await self.store.resolve_edge(message_id)
        role = authorize_viewer(viewer_id, edge)

        if marks_read_on_fetch(role) and not edge.isRead:
            await self.store.set_edge_read_flag(edge.id)
            edge.mark_read()
            await log_event(EventTypes.MESSAGE_READ, {"message_id": edge.id}, user_id=viewer_id)

        return FullMessageRecord(
            id=edge.id,
            from_=edge.senderId,
            to=edge.recipientId,
            content=edge.content,
            isRead=edge.isRead,
            sentTime=edge.sentTime,
        )
