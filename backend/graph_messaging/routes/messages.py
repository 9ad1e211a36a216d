from fastapi import APIRouter, Depends, Query
from typing import Optional
from graph_messaging.db import get_store
from graph_messaging.schemas.message import (
    AnonymousMessageCreate,
    ConversationResponse,
    ConversationsResponse,
    InboxResponse,
    MessageCreate,
    MessageResponse,
    OutboxResponse,
    SendResponse,
    UnreadCountResponse,
)
from graph_messaging.services.authorization import AnonymousSender, AuthenticatedSender
from graph_messaging.services.email_service import get_notifier
from graph_messaging.services.messaging_service import MessagingService
from graph_messaging.utils.auth import get_current_user_id, get_optional_user_id

router = APIRouter()


def get_messaging_service(store=Depends(get_store), notifier=Depends(get_notifier)) -> MessagingService:
    return MessagingService(store, notifier)


@router.post("", response_model=SendResponse)
async def send_message(
    body: MessageCreate,
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    result = await service.send(AuthenticatedSender(current_user_id), body.to, body.message)
    return SendResponse(id=result.id)


@router.post("/anonymous", response_model=SendResponse, response_model_exclude_none=True)
async def send_anonymous_message(
    body: AnonymousMessageCreate,
    current_user_id: Optional[str] = Depends(get_optional_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    # A signed-in caller still gets a real message edge
    if current_user_id is not None:
        sender = AuthenticatedSender(current_user_id)
    else:
        sender = AnonymousSender(body.sender)
    result = await service.send(sender, body.to, body.message)
    return SendResponse(id=result.id)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def fetch_unread_message_count(
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    return UnreadCountResponse(count=await service.unread_count(current_user_id))


@router.get("/inbox", response_model=InboxResponse)
async def fetch_inbox(
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    return InboxResponse(messages=await service.inbox(current_user_id))


@router.get("/outbox", response_model=OutboxResponse)
async def fetch_outbox(
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    return OutboxResponse(messages=await service.outbox(current_user_id))


@router.get("/conversations", response_model=ConversationsResponse)
async def fetch_conversations(
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    return ConversationsResponse(messages=await service.conversation_summaries(current_user_id))


@router.get("/conversation", response_model=ConversationResponse)
async def fetch_conversation(
    with_: str = Query(..., alias="with"),
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    return ConversationResponse(messages=await service.conversation(current_user_id, with_))


# Keep last: the path parameter would otherwise shadow the fixed routes above
@router.get("/{msgid}", response_model=MessageResponse)
async def fetch_message(
    msgid: str,
    current_user_id: str = Depends(get_current_user_id),
    service: MessagingService = Depends(get_messaging_service),
):
    return MessageResponse(message=await service.message(current_user_id, msgid))
