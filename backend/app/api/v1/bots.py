"""Bots API (admin): list, CRUD, bulk delete."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import require_admin
from app.db.session import get_db, get_session_maker
from app.models.user import User
from app.schemas.bot import BotCreate, BotResponse, BotUpdate
from app.schemas.pagination import BulkDelete, BulkDeleteResponse, ListQuery, Paginated, list_query_params
from app.services import bots as bots_service

router = APIRouter(prefix="/bots", tags=["bots"], dependencies=[Depends(require_admin)])

AUTH_ERRORS = {401: {"description": "Not authenticated"}, 403: {"description": "Admin role required"}}


@router.get("", response_model=Paginated[BotResponse], summary="List bots", responses=AUTH_ERRORS)
async def list_bots(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
    query: Annotated[ListQuery, Depends(list_query_params)],
) -> Paginated[BotResponse]:
    page = await bots_service.list_bots(session_maker, query)
    return Paginated[BotResponse](data=[BotResponse.model_validate(b) for b in page.data], meta=page.meta)


@router.delete("/bulk", response_model=BulkDeleteResponse, summary="Bulk delete bots", responses=AUTH_ERRORS)
async def bulk_delete_bots(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: BulkDelete,
) -> BulkDeleteResponse:
    deleted = await bots_service.bulk_delete_bots(session, body.ids)
    return BulkDeleteResponse(deleted=deleted)


@router.get(
    "/{bot_id}",
    response_model=BotResponse,
    summary="Get bot",
    responses={**AUTH_ERRORS, 404: {"description": "Bot not found"}},
)
async def get_bot(
    session: Annotated[AsyncSession, Depends(get_db)],
    bot_id: uuid.UUID,
) -> BotResponse:
    return BotResponse.model_validate(await bots_service.get_bot(session, bot_id))


@router.post("", response_model=BotResponse, status_code=201, summary="Create bot", responses=AUTH_ERRORS)
async def create_bot(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_admin)],
    body: BotCreate,
) -> BotResponse:
    """Create a bot owned by the current user."""
    return BotResponse.model_validate(await bots_service.create_bot(session, body, user.id))


@router.patch(
    "/{bot_id}",
    response_model=BotResponse,
    summary="Update bot",
    responses={**AUTH_ERRORS, 404: {"description": "Bot not found"}},
)
async def update_bot(
    session: Annotated[AsyncSession, Depends(get_db)],
    bot_id: uuid.UUID,
    body: BotUpdate,
) -> BotResponse:
    return BotResponse.model_validate(await bots_service.update_bot(session, bot_id, body))


@router.delete(
    "/{bot_id}",
    status_code=204,
    summary="Delete bot",
    responses={**AUTH_ERRORS, 404: {"description": "Bot not found"}},
)
async def delete_bot(
    session: Annotated[AsyncSession, Depends(get_db)],
    bot_id: uuid.UUID,
) -> None:
    await bots_service.delete_bot(session, bot_id)
