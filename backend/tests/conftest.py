"""
Chirper Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── test_engine: in-memory SQLite with foreign keys on, tables created
    ├── session_factory: async_sessionmaker bound to test_engine
    ├── db_session: one AsyncSession for service-level tests
    ├── mock_db_session: AsyncMock session (no database at all)
    ├── create_user: coroutine that inserts and commits a User
    ├── test_client: HTTPX AsyncClient with get_db_session overridden
    └── lenient_client: test_client setup, unhandled errors returned as 500
"""

import os

# Set BEFORE any chirper import: chirper.config reads the environment once.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-real-0123456789abcdef"
os.environ["APP_LOCALE"] = "en"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from chirper.auth import create_access_token  # noqa: E402
from chirper.database import Base, enable_sqlite_foreign_keys, get_db_session  # noqa: E402
from chirper.models import Tweet, User  # noqa: E402


def auth_headers(user_id: int) -> dict:
    """Authorization header carrying a fresh token for `user_id`."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


async def count_tweets(session_factory, user_id=None) -> int:
    async with session_factory() as session:
        query = select(func.count(Tweet.id))
        if user_id is not None:
            query = query.where(Tweet.user_id == user_id)
        result = await session.execute(query)
        return result.scalar_one()


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_engine():
    """
    A private in-memory database per test.

    StaticPool keeps the single SQLite connection alive, so every session
    sees the same in-memory tables.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.flush.side_effect = OperationalError(...)
        await tweet_service.create_tweet(mock_db_session, 1, data)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def create_user(session_factory):
    """
    Factory fixture: `await create_user(name="Alice")` commits a User and
    returns it. Emails are made unique automatically.
    """
    counter = {"n": 0}

    async def _create(name: str = "Alice", email: str = None) -> User:
        counter["n"] += 1
        async with session_factory() as session:
            user = User(name=name, email=email or f"user{counter['n']}@example.com")
            session.add(user)
            await session.commit()
            return user

    return _create


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is replaced by a session on the in-memory test database
    with the same commit/rollback behavior as the real dependency.
    """
    from chirper.main import app

    async def override_get_db_session():
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


@pytest_asyncio.fixture
async def lenient_client(test_client):
    """
    Same app and database overrides as test_client, but unhandled exceptions
    come back as the 500 response instead of being re-raised into the test.

    Starlette's ServerErrorMiddleware sends the catch-all response and then
    re-raises; raise_app_exceptions=False keeps that second raise out of
    the test.
    """
    from chirper.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
