"""User management (admin)."""

import logging
import uuid

from fastapi import HTTPException
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.auth import hash_password
from app.models.user import User
from app.schemas.pagination import ListQuery
from app.schemas.user import UserCreate, UserUpdate
from app.services.paginated_list import ListPage, PaginatedListConfig, paginated_list

logger = logging.getLogger(__name__)

# password_hash is deliberately absent: it can be neither sorted nor filtered on
USER_LIST_CONFIG = PaginatedListConfig(
    table=User,
    search_columns=(User.name, User.email),
    sort_columns={
        "name": User.name,
        "email": User.email,
        "role": User.role,
        "created_at": User.created_at,
        "updated_at": User.updated_at,
    },
)


async def list_users(session_maker: async_sessionmaker[AsyncSession], query: ListQuery) -> ListPage:
    return await paginated_list(session_maker, query, USER_LIST_CONFIG)


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User:
    r = await session.execute(select(User).where(User.id == user_id))
    user = r.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    r = await session.execute(select(User).where(User.email == email.strip().lower()))
    return r.scalar_one_or_none()


async def create_user(session: AsyncSession, body: UserCreate) -> User:
    email = body.email.strip().lower()
    if await get_user_by_email(session, email) is not None:
        raise HTTPException(status_code=409, detail="User with this email already exists")
    user = User(
        email=email,
        name=body.name,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    logger.info("User created: id=%s role=%s", user.id, user.role)
    return user


async def update_user(session: AsyncSession, user_id: uuid.UUID, body: UserUpdate) -> User:
    user = await get_user(session, user_id)
    if body.name is not None:
        user.name = body.name
    if body.role is not None:
        user.role = body.role
    await session.flush()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user_id: uuid.UUID) -> None:
    user = await get_user(session, user_id)
    await session.delete(user)
    await session.flush()
    logger.info("User deleted: id=%s", user_id)


async def bulk_delete_users(session: AsyncSession, ids: list[uuid.UUID]) -> int:
    r = await session.execute(delete(User).where(User.id.in_(ids)))
    await session.flush()
    return r.rowcount or 0
