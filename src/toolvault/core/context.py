"""Application context shared by all requests of one running app."""
import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncEngine

from toolvault.core.config import Settings
from toolvault.db.session import DatabaseManager
from toolvault.services import seed_service, session_service

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """
    Settings plus the database manager for one application instance.

    Built once per process (or per test) and stored on ``app.state.context``.
    Handlers reach it through FastAPI dependencies, never through globals.
    """

    settings: Settings
    database: DatabaseManager = field(init=False)
    engine: AsyncEngine | None = None

    def __post_init__(self) -> None:
        self.database = DatabaseManager(self.settings, engine=self.engine)

    async def startup(self) -> None:
        """
        Connect, create tables, purge stale sessions, and seed defaults.

        Raises:
            DatabaseConnectionError: If the database is unreachable. Callers at
                process start let this propagate so the server exits.
        """
        await self.database.verify_connection()
        await self.database.create_schema()
        logger.info("Connected to database")

        async with self.database.session_factory() as db:
            purged = await session_service.purge_expired_sessions(db)
            inserted = 0
            if self.settings.seed_defaults:
                inserted = await seed_service.ensure_seeded(db)
            await db.commit()

        if purged:
            logger.info("Purged %d expired admin sessions", purged)
        if inserted:
            logger.info("Seeded %d default bookmarks", inserted)

    async def shutdown(self) -> None:
        """Release database connections."""
        await self.database.dispose()
