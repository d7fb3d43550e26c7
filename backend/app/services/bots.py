"""Bot CRUD and list."""

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.bot import Bot
from app.schemas.bot import BotCreate, BotUpdate
from app.schemas.pagination import ListQuery
from app.services.paginated_list import ListPage, PaginatedListConfig, paginated_list

logger = logging.getLogger(__name__)

BOT_LIST_CONFIG = PaginatedListConfig(
    table=Bot,
    search_columns=(Bot.name,),
    sort_columns={
        "name": Bot.name,
        "created_at": Bot.created_at,
        "updated_at": Bot.updated_at,
    },
)


async def list_bots(session_maker: async_sessionmaker[AsyncSession], query: ListQuery) -> ListPage:
    return await paginated_list(session_maker, query, BOT_LIST_CONFIG)


async def get_bot(session: AsyncSession, bot_id: uuid.UUID) -> Bot:
    r = await session.execute(select(Bot).where(Bot.id == bot_id))
    bot = r.scalar_one_or_none()
    if not bot:
        raise HTTPException(status_code=404, detail="Bot not found")
    return bot


async def create_bot(session: AsyncSession, body: BotCreate, user_id: uuid.UUID) -> Bot:
    bot = Bot(**body.model_dump(), user_id=user_id)
    session.add(bot)
    await session.flush()
    await session.refresh(bot)
    logger.info("Bot created: id=%s user_id=%s", bot.id, user_id)
    return bot


async def update_bot(session: AsyncSession, bot_id: uuid.UUID, body: BotUpdate) -> Bot:
    bot = await get_bot(session, bot_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(bot, key, value)
    await session.flush()
    await session.refresh(bot)
    return bot


async def delete_bot(session: AsyncSession, bot_id: uuid.UUID) -> None:
    bot = await get_bot(session, bot_id)
    await session.delete(bot)
    await session.flush()
    logger.info("Bot deleted: id=%s", bot_id)


async def bulk_delete_bots(session: AsyncSession, ids: list[uuid.UUID]) -> int:
    r = await session.execute(delete(Bot).where(Bot.id.in_(ids)))
    await session.flush()
    return r.rowcount or 0
