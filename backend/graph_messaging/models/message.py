from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum
from typing import NamedTuple


class ReadState(str, Enum):
    """Two-state read machine: unread -> read, read is terminal."""

    UNREAD = "unread"
    READ = "read"


class MessageEdge(BaseModel):
    """A directed message relationship sender (tail) -> recipient (head)."""

    id: str = Field(..., alias="_id")
    senderId: str
    recipientId: str
    content: str
    sentTime: datetime
    isRead: bool = False

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }

    def __setattr__(self, name, value):
        # READ is terminal
        if name == "isRead" and self.isRead and not value:
            raise ValueError(f"message {self.id} is already read")
        super().__setattr__(name, value)

    @property
    def read_state(self) -> ReadState:
        return ReadState.READ if self.isRead else ReadState.UNREAD

    def mark_read(self) -> None:
        self.isRead = True

    def counterparty_of(self, node_id: str) -> str:
        return self.recipientId if node_id == self.senderId else self.senderId

    def to_document(self) -> dict:
        return {
            "_id": self.id,
            "senderId": self.senderId,
            "recipientId": self.recipientId,
            "content": self.content,
            "sentTime": self.sentTime,
            "isRead": self.isRead,
        }


class EdgeRef(NamedTuple):
    """Row returned by a pair query: a reference plus the columns read alongside it."""

    edge_id: str
    tail_id: str
    content: str
    sentTime: datetime
