"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from toolvault.api.dependencies import get_async_session
from toolvault.api.main import create_app
from toolvault.core.config import Settings
from toolvault.core.context import AppContext
from toolvault.db.session import create_engine_for_url
from toolvault.models import Base

TEST_DATABASE_URL = "sqlite+aiosqlite://"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


def make_settings(**overrides: object) -> Settings:
    """
    Build settings for tests without reading a local .env file.

    Overrides use the environment variable names (aliases), e.g. AUTH_ENABLED.
    """
    values: dict[str, object] = {
        "database_url": TEST_DATABASE_URL,
        "SEED_DEFAULTS": False,
        "AUTH_ENABLED": False,
        "API_PREFIX": "/api",
        "CORS_ORIGINS": "*",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    """Settings with auth disabled."""
    return make_settings()


@pytest.fixture
def auth_settings() -> Settings:
    """Settings with admin gating enabled."""
    return make_settings(
        AUTH_ENABLED=True,
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database with all tables for one test."""
    engine = create_engine_for_url(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session on the test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


def build_app(settings: Settings, engine: AsyncEngine) -> FastAPI:
    """Create an app whose context uses the test engine."""
    return create_app(AppContext(settings=settings, engine=engine))


@asynccontextmanager
async def make_client(
    app: FastAPI,
    db_session: AsyncSession,
    headers: dict[str, str] | None = None,
) -> AsyncGenerator[AsyncClient]:
    """
    Yield an AsyncClient for the app with the session dependency overridden.

    Requests share ``db_session`` with the test, so the test can inspect the
    database directly after each call.
    """

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers=headers,
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(
    settings: Settings,
    async_engine: AsyncEngine,
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client for an app with auth disabled."""
    async with make_client(build_app(settings, async_engine), db_session) as test_client:
        yield test_client


@pytest.fixture
async def auth_client(
    auth_settings: Settings,
    async_engine: AsyncEngine,
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client for an app with admin gating enabled (not logged in)."""
    async with make_client(build_app(auth_settings, async_engine), db_session) as test_client:
        yield test_client


@pytest.fixture
async def admin_token(auth_client: AsyncClient) -> str:
    """Log in through the API and return the session token."""
    response = await auth_client.post(
        "/api/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["token"]
