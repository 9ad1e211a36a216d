from abc import ABC, abstractmethod
from typing import List

from graph_messaging.models.message import EdgeRef, MessageEdge
from graph_messaging.models.user import UserNode


class MessageStore(ABC):
    """Capability interface over the graph engine holding users and messages.

    Implementations own persistence, id generation and timestamps. Lookups of
    absent nodes or edges raise ``NotFound``.
    """

    @abstractmethod
    async def resolve_node(self, node_id: str) -> UserNode:
        ...

    @abstractmethod
    async def create_message_edge(self, sender_id: str, recipient_id: str, content: str) -> MessageEdge:
        ...

    @abstractmethod
    async def resolve_edge(self, edge_id: str) -> MessageEdge:
        ...

    @abstractmethod
    async def set_edge_read_flag(self, edge_id: str) -> None:
        """Move the edge to the read state. There is no way back to unread."""

    @abstractmethod
    async def list_incoming_edges(self, node_id: str) -> List[MessageEdge]:
        ...

    @abstractmethod
    async def list_outgoing_edges(self, node_id: str) -> List[MessageEdge]:
        ...

    @abstractmethod
    async def query_edges_between(self, node_a: str, node_b: str) -> List[EdgeRef]:
        """All edges between the two nodes, either direction, newest first."""

    async def ping(self) -> None:
        return None
