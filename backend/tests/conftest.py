"""Pytest configuration and shared fixtures for API tests."""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

# Set test DB before app imports so config/engine use it.
# TEST_DATABASE_URL may point at Postgres (postgresql+asyncpg://...); default is a throwaway SQLite file.
_default_db = "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="bots-api-"), "test.db")
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", _default_db)
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

from app.core.auth import create_access_token, hash_password
from app.db.base import Base
from app.db.session import async_session_maker, engine, init_db
from app.main import app
from app.models.user import User


async def _truncate_all():
    """Delete all rows in reverse dependency order so tests start clean."""
    tables = [t.name for t in reversed(Base.metadata.sorted_tables)]
    async with engine.begin() as conn:
        for table in tables:
            await conn.execute(text(f"DELETE FROM {table}"))


@pytest_asyncio.fixture
async def ensure_db():
    """Create tables (idempotent); drop pooled connections afterwards so each test loop starts fresh."""
    await init_db()
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def client(ensure_db):
    """Yield AsyncClient. No session override; use clean_db + admin_user for isolated state."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def clean_db(ensure_db):
    """Empty all tables so the next test has a clean DB."""
    await _truncate_all()
    yield


async def _create_user(email: str, name: str, role: str, password: str = "password123") -> tuple:
    async with async_session_maker() as session:
        user = User(email=email, name=name, password_hash=hash_password(password), role=role)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        token = create_access_token(user.id, user.email, user.role)
        return user.id, user.email, token


@pytest_asyncio.fixture
async def admin_user(clean_db):
    """Create an admin via DB (committed) and return (user_id, email, access_token)."""
    return await _create_user("admin@test.com", "Admin", "admin")


@pytest_asyncio.fixture
async def plain_user(clean_db):
    """Create a non-admin user and return (user_id, email, access_token)."""
    return await _create_user("user@test.com", "Plain User", "user")


@pytest.fixture
def auth_headers(admin_user):
    """Authorization header for the admin user."""
    _, __, token = admin_user
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(plain_user):
    _, __, token = plain_user
    return {"Authorization": f"Bearer {token}"}
