import copy
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from graph_messaging.errors import NotFound
from graph_messaging.models.message import EdgeRef, MessageEdge
from graph_messaging.models.user import UserNode
from graph_messaging.store.base import MessageStore
from graph_messaging.utils.identifiers import new_id


class InMemoryMessageStore(MessageStore):
    """Process-local store used for tests and MESSAGE_STORE=memory development runs.

    Edges are returned in insertion order. Send timestamps are strictly
    increasing so two writes in the same clock tick still order.
    """

    def __init__(self):
        self._nodes: Dict[str, UserNode] = {}
        self._edges: Dict[str, MessageEdge] = {}
        self._last_sent: Optional[datetime] = None

    def add_user(self, email: Optional[str] = None, username: str = "", node_id: Optional[str] = None) -> UserNode:
        node = UserNode(id=node_id or new_id(), email=email, username=username)
        self._nodes[node.id] = node
        return node

    def _next_sent_time(self) -> datetime:
        now = datetime.utcnow()
        if self._last_sent is not None and now <= self._last_sent:
            now = self._last_sent + timedelta(microseconds=1)
        self._last_sent = now
        return now

    async def resolve_node(self, node_id: str) -> UserNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFound("node", node_id)

    async def create_message_edge(self, sender_id: str, recipient_id: str, content: str) -> MessageEdge:
        await self.resolve_node(sender_id)
        await self.resolve_node(recipient_id)
        edge = MessageEdge(
            id=new_id(),
            senderId=sender_id,
            recipientId=recipient_id,
            content=content,
            sentTime=self._next_sent_time(),
        )
        self._edges[edge.id] = edge
        return copy.deepcopy(edge)

    async def resolve_edge(self, edge_id: str) -> MessageEdge:
        try:
            return copy.deepcopy(self._edges[edge_id])
        except KeyError:
            raise NotFound("message", edge_id)

    async def set_edge_read_flag(self, edge_id: str) -> None:
        try:
            self._edges[edge_id].mark_read()
        except KeyError:
            raise NotFound("message", edge_id)

    async def list_incoming_edges(self, node_id: str) -> List[MessageEdge]:
        return [copy.deepcopy(e) for e in self._edges.values() if e.recipientId == node_id]

    async def list_outgoing_edges(self, node_id: str) -> List[MessageEdge]:
        return [copy.deepcopy(e) for e in self._edges.values() if e.senderId == node_id]

    async def query_edges_between(self, node_a: str, node_b: str) -> List[EdgeRef]:
        pair = {node_a, node_b}
        edges = [e for e in self._edges.values() if {e.senderId, e.recipientId} == pair]
        edges.sort(key=lambda e: e.sentTime, reverse=True)
        return [EdgeRef(e.id, e.senderId, e.content, e.sentTime) for e in edges]
