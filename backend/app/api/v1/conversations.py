"""Conversations API (admin) and public chat history for the widget."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import require_admin
from app.db.session import get_db, get_session_maker
from app.schemas.conversation import ConversationResponse, ConversationWithMessages, MessageResponse
from app.schemas.pagination import BulkDelete, BulkDeleteResponse, ListQuery, Paginated, list_query_params
from app.services import conversations as conversations_service

router = APIRouter(prefix="/conversations", tags=["conversations"], dependencies=[Depends(require_admin)])
chat_router = APIRouter(prefix="/chat", tags=["chat"])

AUTH_ERRORS = {401: {"description": "Not authenticated"}, 403: {"description": "Admin role required"}}
NOT_FOUND = {404: {"description": "Conversation not found"}}


@router.get("", response_model=Paginated[ConversationResponse], summary="List conversations", responses=AUTH_ERRORS)
async def list_conversations(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
    query: Annotated[ListQuery, Depends(list_query_params)],
    bot_id: uuid.UUID | None = None,
) -> Paginated[ConversationResponse]:
    page = await conversations_service.list_conversations(session_maker, query, bot_id)
    return Paginated[ConversationResponse](
        data=[ConversationResponse.model_validate(c) for c in page.data],
        meta=page.meta,
    )


@router.delete("/bulk", response_model=BulkDeleteResponse, summary="Bulk delete conversations", responses=AUTH_ERRORS)
async def bulk_delete_conversations(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: BulkDelete,
) -> BulkDeleteResponse:
    return BulkDeleteResponse(deleted=await conversations_service.bulk_delete_conversations(session, body.ids))


@router.get(
    "/{conversation_id}",
    response_model=ConversationWithMessages,
    summary="Get conversation with messages",
    responses={**AUTH_ERRORS, **NOT_FOUND},
)
async def get_conversation(
    session: Annotated[AsyncSession, Depends(get_db)],
    conversation_id: uuid.UUID,
) -> ConversationWithMessages:
    conversation, messages = await conversations_service.get_conversation_with_messages(session, conversation_id)
    base = ConversationResponse.model_validate(conversation)
    return ConversationWithMessages(
        **base.model_dump(),
        messages=[MessageResponse.model_validate(m) for m in messages],
    )


@router.delete(
    "/{conversation_id}",
    status_code=204,
    summary="Delete conversation",
    responses={**AUTH_ERRORS, **NOT_FOUND},
)
async def delete_conversation(
    session: Annotated[AsyncSession, Depends(get_db)],
    conversation_id: uuid.UUID,
) -> None:
    await conversations_service.delete_conversation(session, conversation_id)


@chat_router.get("/history/{bot_id}", response_model=list[MessageResponse], summary="Chat history for a widget sender")
async def get_chat_history(
    session: Annotated[AsyncSession, Depends(get_db)],
    bot_id: uuid.UUID,
    sender_id: str = Query(min_length=1),
) -> list[MessageResponse]:
    """Public: messages of the sender's conversation with the bot, oldest first."""
    messages = await conversations_service.get_conversation_history(session, bot_id, sender_id)
    return [MessageResponse.model_validate(m) for m in messages]
