"""FastAPI dependencies for injection."""
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.core.config import Settings
from toolvault.core.context import AppContext


def get_app_context(request: Request) -> AppContext:
    """Return the application context stored on the app at construction time."""
    return request.app.state.context


def get_settings(context: AppContext = Depends(get_app_context)) -> Settings:
    """Return the settings of the running application."""
    return context.settings


async def get_async_session(
    context: AppContext = Depends(get_app_context),
) -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    Uses unit-of-work pattern: services use flush() for refreshing objects,
    commit happens once here at request end. This ensures atomic transactions
    per request - if anything fails, all changes are rolled back.
    """
    async with context.database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
