"""
FoodShelf Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── db_engine:       In-memory aiosqlite engine with the schema created
    ├── session_factory: async_sessionmaker bound to db_engine
    ├── test_client:     HTTPX AsyncClient wired to the app, with
    │                    get_db_session overridden to use db_engine
    ├── alice / bob:     Persisted users with bearer tokens
    └── make_food:       Inserts a food directly, bypassing the API
"""

import os

# Must happen before any foodshelf import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "http://test"

import uuid
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from foodshelf.database import Base, get_db_session
from foodshelf.models import Food, User


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = food
        result = await food_service.get_food(mock_db_session, str(food.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database-backed fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory SQLite database per test.

    StaticPool keeps one connection alive, so every session in the test
    sees the same in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden with the same commit/rollback contract
    as the real dependency, bound to the in-memory database.
    """
    from foodshelf.main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def _create_user(session_factory, email: str) -> User:
    async with session_factory() as session:
        user = User(email=email, token=uuid.uuid4().hex)
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def alice(session_factory) -> User:
    return await _create_user(session_factory, "alice@example.com")


@pytest_asyncio.fixture
async def bob(session_factory) -> User:
    return await _create_user(session_factory, "bob@example.com")


@pytest.fixture
def make_food(session_factory):
    """Factory inserting a food owned by `owner`; returns the persisted Food."""

    async def _make(owner: User, title: str = "Soup", text: str | None = "Hot and salty") -> Food:
        async with session_factory() as session:
            food = Food(owner_id=owner.id, title=title, text=text)
            session.add(food)
            await session.commit()
            return food

    return _make


@pytest.fixture
def fetch_food(session_factory):
    """Reads a food straight from the database (None if it is gone)."""

    async def _fetch(food_id: uuid.UUID) -> Food | None:
        async with session_factory() as session:
            return await session.get(Food, food_id)

    return _fetch
