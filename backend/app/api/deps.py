"""FastAPI dependencies: current user from JWT, admin gate."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import decode_token
from app.db.session import get_db
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = auth_header[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        claims = decode_token(token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    r = await session.execute(select(User).where(User.id == claims.user_id))
    user = r.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if claims.role != user.role:
        logger.info("Rejected token for user %s: role changed from %s to %s", user.id, claims.role, user.role)
        raise HTTPException(status_code=401, detail="Role changed, please log in again")
    return user


async def require_admin(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Require role=admin. Raises 403 otherwise."""
    if user.role != UserRole.admin.value:
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return user
