"""Documents API (admin): knowledge base per bot."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import require_admin
from app.db.session import get_db, get_session_maker
from app.schemas.document import DocumentCreate, DocumentResponse, DocumentUpdate
from app.schemas.pagination import BulkDelete, BulkDeleteResponse, ListQuery, Paginated, list_query_params
from app.services import documents as documents_service

router = APIRouter(prefix="/documents", tags=["documents"], dependencies=[Depends(require_admin)])

AUTH_ERRORS = {401: {"description": "Not authenticated"}, 403: {"description": "Admin role required"}}
NOT_FOUND = {404: {"description": "Document not found"}}


@router.get("", response_model=Paginated[DocumentResponse], summary="List documents", responses=AUTH_ERRORS)
async def list_documents(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
    query: Annotated[ListQuery, Depends(list_query_params)],
    bot_id: uuid.UUID | None = None,
) -> Paginated[DocumentResponse]:
    """List documents, restricted to one bot when bot_id is given."""
    page = await documents_service.list_documents(session_maker, query, bot_id)
    return Paginated[DocumentResponse](
        data=[DocumentResponse.model_validate(d) for d in page.data],
        meta=page.meta,
    )


@router.delete("/bulk", response_model=BulkDeleteResponse, summary="Bulk delete documents", responses=AUTH_ERRORS)
async def bulk_delete_documents(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: BulkDelete,
) -> BulkDeleteResponse:
    return BulkDeleteResponse(deleted=await documents_service.bulk_delete_documents(session, body.ids))


@router.get("/{document_id}", response_model=DocumentResponse, summary="Get document", responses={**AUTH_ERRORS, **NOT_FOUND})
async def get_document(
    session: Annotated[AsyncSession, Depends(get_db)],
    document_id: uuid.UUID,
) -> DocumentResponse:
    return DocumentResponse.model_validate(await documents_service.get_document(session, document_id))


@router.post(
    "",
    response_model=DocumentResponse,
    status_code=201,
    summary="Create document",
    responses={**AUTH_ERRORS, 404: {"description": "Bot not found"}},
)
async def create_document(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: DocumentCreate,
) -> DocumentResponse:
    return DocumentResponse.model_validate(await documents_service.create_document(session, body))


@router.patch("/{document_id}", response_model=DocumentResponse, summary="Update document", responses={**AUTH_ERRORS, **NOT_FOUND})
async def update_document(
    session: Annotated[AsyncSession, Depends(get_db)],
    document_id: uuid.UUID,
    body: DocumentUpdate,
) -> DocumentResponse:
    return DocumentResponse.model_validate(await documents_service.update_document(session, document_id, body))


@router.delete("/{document_id}", status_code=204, summary="Delete document", responses={**AUTH_ERRORS, **NOT_FOUND})
async def delete_document(
    session: Annotated[AsyncSession, Depends(get_db)],
    document_id: uuid.UUID,
) -> None:
    await documents_service.delete_document(session, document_id)
