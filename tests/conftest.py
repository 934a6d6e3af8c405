"""
Shared test fixtures for the Taskboard test suite.

Async throughout (aiosqlite + AsyncSession); every test gets a fresh
in-memory database with the bootstrap admin (PIN 1234) already seeded.
"""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["SECRET_KEY"] = "test-secret-key-for-the-taskboard-suite"
os.environ["FIRST_ADMIN_PIN"] = "1234"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.api.v1.deps import get_db
from taskboard.db.base import Base
from taskboard.main import app, seed_first_admin
from taskboard.models.user import User

ADMIN_PIN = "1234"

ClientFactory = Callable[..., Awaitable[AsyncClient]]


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create all tables on a private engine, seed the admin, drop afterwards."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with factory() as session:
        await seed_first_admin(session)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    yield factory

    app.dependency_overrides.pop(get_db, None)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def make_client(session_factory) -> AsyncGenerator[ClientFactory, None]:
    """Factory for independent clients, each with its own cookie jar.

    ``await make_client(pin)`` returns a client already logged in with *pin*.
    """
    clients: list[AsyncClient] = []

    async def _make(pin: str | None = None) -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        if pin is not None:
            resp = await client.post("/api/auth/login", json={"pin": pin})
            assert resp.status_code == 200, resp.text
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
async def async_client(make_client) -> AsyncClient:
    """Anonymous client wired to the app."""
    return await make_client()


@pytest.fixture
async def admin_client(make_client) -> AsyncClient:
    return await make_client(ADMIN_PIN)


@pytest.fixture
async def add_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Insert a user row directly, bypassing the API."""

    async def _add(name: str, pin: str, role: str = "employee", is_active: bool = True) -> User:
        user = User(name=name, pin=pin, role=role, is_active=is_active)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _add
