"""Users API (admin): list, CRUD, bulk delete."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import require_admin
from app.db.session import get_db, get_session_maker
from app.schemas.pagination import BulkDelete, BulkDeleteResponse, ListQuery, Paginated, list_query_params
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])

AUTH_ERRORS = {401: {"description": "Not authenticated"}, 403: {"description": "Admin role required"}}
NOT_FOUND = {404: {"description": "User not found"}}


@router.get("", response_model=Paginated[UserResponse], summary="List users", responses=AUTH_ERRORS)
async def list_users(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_maker)],
    query: Annotated[ListQuery, Depends(list_query_params)],
) -> Paginated[UserResponse]:
    page = await users_service.list_users(session_maker, query)
    return Paginated[UserResponse](data=[UserResponse.model_validate(u) for u in page.data], meta=page.meta)


@router.delete("/bulk", response_model=BulkDeleteResponse, summary="Bulk delete users", responses=AUTH_ERRORS)
async def bulk_delete_users(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: BulkDelete,
) -> BulkDeleteResponse:
    return BulkDeleteResponse(deleted=await users_service.bulk_delete_users(session, body.ids))


@router.get("/{user_id}", response_model=UserResponse, summary="Get user", responses={**AUTH_ERRORS, **NOT_FOUND})
async def get_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    user_id: uuid.UUID,
) -> UserResponse:
    return UserResponse.model_validate(await users_service.get_user(session, user_id))


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create user",
    responses={**AUTH_ERRORS, 409: {"description": "Email already registered"}},
)
async def create_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: UserCreate,
) -> UserResponse:
    return UserResponse.model_validate(await users_service.create_user(session, body))


@router.patch("/{user_id}", response_model=UserResponse, summary="Update user", responses={**AUTH_ERRORS, **NOT_FOUND})
async def update_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    user_id: uuid.UUID,
    body: UserUpdate,
) -> UserResponse:
    return UserResponse.model_validate(await users_service.update_user(session, user_id, body))


@router.delete("/{user_id}", status_code=204, summary="Delete user", responses={**AUTH_ERRORS, **NOT_FOUND})
async def delete_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    user_id: uuid.UUID,
) -> None:
    await users_service.delete_user(session, user_id)
