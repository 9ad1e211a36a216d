from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime


class MessageCreate(BaseModel):
    to: str
    message: str


class AnonymousMessageCreate(BaseModel):
    to: str
    message: str
    sender: Optional[str] = None  # from address, required when there is no session


class InboxRecord(BaseModel):
    from_: str = Field(..., alias="from")
    message: str
    isRead: bool
    sentTime: datetime

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }


class OutboxRecord(BaseModel):
    to: str
    message: str
    isRead: bool
    sentTime: datetime

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }


class ConversationRecord(BaseModel):
    id: str
    from_: str = Field(..., alias="from")
    to: str
    message: str
    isRead: bool
    sentTime: datetime

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }


class FullMessageRecord(BaseModel):
    id: str
    from_: str = Field(..., alias="from")
    to: str
    content: str
    isRead: bool
    sentTime: datetime

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }


class SendResult(BaseModel):
    id: Optional[str] = None  # None for anonymous sends, which write no edge


# --------------------------------------------------------------------------
# Response envelopes
# --------------------------------------------------------------------------

class SendResponse(BaseModel):
    success: bool = True
    id: Optional[str] = None


class UnreadCountResponse(BaseModel):
    success: bool = True
    count: int


class InboxResponse(BaseModel):
    success: bool = True
    messages: Dict[str, InboxRecord]


class OutboxResponse(BaseModel):
    success: bool = True
    messages: Dict[str, OutboxRecord]


class ConversationsResponse(BaseModel):
    success: bool = True
    messages: List[ConversationRecord]


class ConversationResponse(BaseModel):
    success: bool = True
    messages: Dict[str, ConversationRecord]


class MessageResponse(BaseModel):
    success: bool = True
    message: FullMessageRecord
