"""Knowledge-base documents, optionally scoped to one bot when listing."""

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.document import Document
from app.schemas.document import DocumentCreate, DocumentUpdate
from app.schemas.pagination import ListQuery
from app.services.bots import get_bot
from app.services.paginated_list import ListPage, PaginatedListConfig, paginated_list

logger = logging.getLogger(__name__)


async def list_documents(
    session_maker: async_sessionmaker[AsyncSession],
    query: ListQuery,
    bot_id: uuid.UUID | None = None,
) -> ListPage:
    config = PaginatedListConfig(
        table=Document,
        search_columns=(Document.title,),
        sort_columns={
            "title": Document.title,
            "created_at": Document.created_at,
            "updated_at": Document.updated_at,
        },
        extra_where=Document.bot_id == bot_id if bot_id else None,
    )
    return await paginated_list(session_maker, query, config)


async def get_document(session: AsyncSession, document_id: uuid.UUID) -> Document:
    r = await session.execute(select(Document).where(Document.id == document_id))
    doc = r.scalar_one_or_none()
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    return doc


async def create_document(session: AsyncSession, body: DocumentCreate) -> Document:
    await get_bot(session, body.bot_id)
    doc = Document(**body.model_dump())
    session.add(doc)
    await session.flush()
    await session.refresh(doc)
    logger.info("Document created: id=%s bot_id=%s", doc.id, doc.bot_id)
    return doc


async def update_document(session: AsyncSession, document_id: uuid.UUID, body: DocumentUpdate) -> Document:
    doc = await get_document(session, document_id)
    if body.title is not None:
        doc.title = body.title
    if body.content is not None:
        doc.content = body.content
    await session.flush()
    await session.refresh(doc)
    return doc


async def delete_document(session: AsyncSession, document_id: uuid.UUID) -> None:
    doc = await get_document(session, document_id)
    await session.delete(doc)
    await session.flush()


async def bulk_delete_documents(session: AsyncSession, ids: list[uuid.UUID]) -> int:
    r = await session.execute(delete(Document).where(Document.id.in_(ids)))
    await session.flush()
    return r.rowcount or 0
