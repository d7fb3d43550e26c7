"""Leads API (admin)."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import require_admin
from app.db.session import get_db, get_session_maker
from app.schemas.lead import LeadCreate, LeadResponse, LeadUpdate
from app.schemas.pagination import BulkDelete, BulkDeleteResponse, ListQuery, Paginated, list_query_params
from app.services import leads as leads_service

router = APIRouter(prefix="/leads", tags=["leads"], dependencies=[Depends(require_admin)])

AUTH_ERRORS = {401: {"description": "Not authenticated"}, 403: {"description": "Admin role required"}}
NOT_FOUND = {404: {"description": "Lead not found"}}


@router.get("", response_model=Paginated[LeadResponse], summary="List leads", responses=AUTH_ERRORS)
async def list_leads(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
    query: Annotated[ListQuery, Depends(list_query_params)],
    bot_id: uuid.UUID | None = None,
) -> Paginated[LeadResponse]:
    page = await leads_service.list_leads(session_maker, query, bot_id)
    return Paginated[LeadResponse](data=[LeadResponse.model_validate(lead) for lead in page.data], meta=page.meta)


@router.delete("/bulk", response_model=BulkDeleteResponse, summary="Bulk delete leads", responses=AUTH_ERRORS)
async def bulk_delete_leads(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: BulkDelete,
) -> BulkDeleteResponse:
    return BulkDeleteResponse(deleted=await leads_service.bulk_delete_leads(session, body.ids))


@router.get("/{lead_id}", response_model=LeadResponse, summary="Get lead", responses={**AUTH_ERRORS, **NOT_FOUND})
async def get_lead(
    session: Annotated[AsyncSession, Depends(get_db)],
    lead_id: uuid.UUID,
) -> LeadResponse:
    return LeadResponse.model_validate(await leads_service.get_lead(session, lead_id))


@router.post(
    "",
    response_model=LeadResponse,
    status_code=201,
    summary="Create or update lead",
    responses={**AUTH_ERRORS, 404: {"description": "Bot not found"}},
)
async def create_lead(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: LeadCreate,
) -> LeadResponse:
    """Create a lead; if the sender already has one for this bot, fill in its non-null fields instead."""
    return LeadResponse.model_validate(await leads_service.create_lead(session, body))


@router.patch("/{lead_id}", response_model=LeadResponse, summary="Update lead", responses={**AUTH_ERRORS, **NOT_FOUND})
async def update_lead(
    session: Annotated[AsyncSession, Depends(get_db)],
    lead_id: uuid.UUID,
    body: LeadUpdate,
) -> LeadResponse:
    return LeadResponse.model_validate(await leads_service.update_lead(session, lead_id, body))


@router.delete("/{lead_id}", status_code=204, summary="Delete lead", responses={**AUTH_ERRORS, **NOT_FOUND})
async def delete_lead(
    session: Annotated[AsyncSession, Depends(get_db)],
    lead_id: uuid.UUID,
) -> None:
    await leads_service.delete_lead(session, lead_id)
