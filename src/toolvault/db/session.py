"""Async SQLAlchemy engine and session factory."""
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from toolvault.core.config import Settings
from toolvault.models import Base
from toolvault.services.exceptions import DatabaseConnectionError


class DatabaseManager:
    """
    Owns the single async engine for one application instance.

    The engine is created on first access and cached; every request session
    comes from the same engine and its connection pool. Nothing here connects
    until a query runs or ``verify_connection`` is called.
    """

    def __init__(self, settings: Settings, engine: AsyncEngine | None = None) -> None:
        self._settings = settings
        self._engine = engine
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Return the cached engine, creating it on first access."""
        if self._engine is None:
            self._engine = create_engine_for_url(self._settings.database_url)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory bound to the cached engine."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_factory

    async def verify_connection(self) -> None:
        """
        Run a trivial query to prove the database is reachable.

        Raises:
            DatabaseConnectionError: If the connection or query fails.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (OperationalError, DBAPIError, OSError) as e:
            raise DatabaseConnectionError(f"Database unreachable: {e}") from e

    async def create_schema(self) -> None:
        """Create all tables that don't exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()


def create_engine_for_url(database_url: str) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    In-memory SQLite gets a StaticPool so every session sees the same database.
    """
    if _is_memory_sqlite(database_url):
        return create_async_engine(
            database_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
    )


def _is_memory_sqlite(database_url: str) -> bool:
    """True for in-memory SQLite URLs such as ``sqlite+aiosqlite://``."""
    if not database_url.startswith("sqlite"):
        return False
    return ":memory:" in database_url or database_url.rstrip("/").endswith(":")
