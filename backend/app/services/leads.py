"""Leads captured per bot and widget sender."""

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.lead import Lead
from app.schemas.lead import LeadCreate, LeadUpdate
from app.schemas.pagination import ListQuery
from app.services.bots import get_bot
from app.services.paginated_list import ListPage, PaginatedListConfig, paginated_list

logger = logging.getLogger(__name__)


async def list_leads(
    session_maker: async_sessionmaker[AsyncSession],
    query: ListQuery,
    bot_id: uuid.UUID | None = None,
) -> ListPage:
    config = PaginatedListConfig(
        table=Lead,
        search_columns=(Lead.name, Lead.email, Lead.phone, Lead.sender_id),
        sort_columns={
            "name": Lead.name,
            "email": Lead.email,
            "phone": Lead.phone,
            "sender_id": Lead.sender_id,
            "created_at": Lead.created_at,
        },
        extra_where=Lead.bot_id == bot_id if bot_id else None,
    )
    return await paginated_list(session_maker, query, config)


async def get_lead(session: AsyncSession, lead_id: uuid.UUID) -> Lead:
    r = await session.execute(select(Lead).where(Lead.id == lead_id))
    lead = r.scalar_one_or_none()
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


async def create_lead(session: AsyncSession, body: LeadCreate) -> Lead:
    """Insert a lead, or fill in the existing (bot_id, sender_id) lead; null fields keep stored values."""
    await get_bot(session, body.bot_id)
    r = await session.execute(
        select(Lead).where(Lead.bot_id == body.bot_id, Lead.sender_id == body.sender_id)
    )
    lead = r.scalar_one_or_none()
    if lead:
        if body.name is not None:
            lead.name = body.name
        if body.email is not None:
            lead.email = body.email
        if body.phone is not None:
            lead.phone = body.phone
        if body.metadata is not None:
            lead.extra = body.metadata
    else:
        lead = Lead(
            bot_id=body.bot_id,
            sender_id=body.sender_id,
            name=body.name,
            email=body.email,
            phone=body.phone,
            extra=body.metadata,
        )
        session.add(lead)
        logger.info("Lead created: bot_id=%s sender_id=%s", body.bot_id, body.sender_id)
    await session.flush()
    await session.refresh(lead)
    return lead


async def update_lead(session: AsyncSession, lead_id: uuid.UUID, body: LeadUpdate) -> Lead:
    lead = await get_lead(session, lead_id)
    data = body.model_dump(exclude_unset=True)
    if "metadata" in data:
        lead.extra = data.pop("metadata")
    for key, value in data.items():
        setattr(lead, key, value)
    await session.flush()
    await session.refresh(lead)
    return lead


async def delete_lead(session: AsyncSession, lead_id: uuid.UUID) -> None:
    lead = await get_lead(session, lead_id)
    await session.delete(lead)
    await session.flush()


async def bulk_delete_leads(session: AsyncSession, ids: list[uuid.UUID]) -> int:
    r = await session.execute(delete(Lead).where(Lead.id.in_(ids)))
    await session.flush()
    return r.rowcount or 0
