"""Conversations between widget visitors and bots, with their message history."""

import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.conversation import Conversation, Message
from app.schemas.pagination import ListQuery
from app.services.paginated_list import ListPage, PaginatedListConfig, paginated_list


async def list_conversations(
    session_maker: async_sessionmaker[AsyncSession],
    query: ListQuery,
    bot_id: uuid.UUID | None = None,
) -> ListPage:
    config = PaginatedListConfig(
        table=Conversation,
        search_columns=(Conversation.title, Conversation.sender_id),
        sort_columns={
            "title": Conversation.title,
            "sender_id": Conversation.sender_id,
            "created_at": Conversation.created_at,
            "updated_at": Conversation.updated_at,
        },
        extra_where=Conversation.bot_id == bot_id if bot_id else None,
    )
    return await paginated_list(session_maker, query, config)


async def get_conversation(session: AsyncSession, conversation_id: uuid.UUID) -> Conversation:
    r = await session.execute(select(Conversation).where(Conversation.id == conversation_id))
    conversation = r.scalar_one_or_none()
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation


async def get_messages(session: AsyncSession, conversation_id: uuid.UUID) -> list[Message]:
    r = await session.execute(
        select(Message).where(Message.conversation_id == conversation_id).order_by(Message.created_at.asc())
    )
    return list(r.scalars().all())


async def get_conversation_with_messages(
    session: AsyncSession, conversation_id: uuid.UUID
) -> tuple[Conversation, list[Message]]:
    conversation = await get_conversation(session, conversation_id)
    return conversation, await get_messages(session, conversation_id)


async def get_conversation_history(session: AsyncSession, bot_id: uuid.UUID, sender_id: str) -> list[Message]:
    """Messages of the (bot, sender) conversation, oldest first; empty if the sender never chatted."""
    r = await session.execute(
        select(Conversation.id).where(Conversation.bot_id == bot_id, Conversation.sender_id == sender_id).limit(1)
    )
    conversation_id = r.scalar_one_or_none()
    if conversation_id is None:
        return []
    return await get_messages(session, conversation_id)


async def delete_conversation(session: AsyncSession, conversation_id: uuid.UUID) -> None:
    conversation = await get_conversation(session, conversation_id)
    # messages go with it through the relationship cascade
    await session.delete(conversation)
    await session.flush()


async def bulk_delete_conversations(session: AsyncSession, ids: list[uuid.UUID]) -> int:
    await session.execute(delete(Message).where(Message.conversation_id.in_(ids)))
    r = await session.execute(delete(Conversation).where(Conversation.id.in_(ids)))
    await session.flush()
    return r.rowcount or 0
