"""Admin session authentication dependencies."""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.api.dependencies import get_async_session, get_settings
from toolvault.core.config import Settings
from toolvault.models.admin_session import AdminSession
from toolvault.services import session_service
from toolvault.services.exceptions import AuthError



# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if credentials is None:
        return None
    return credentials.credentials


async def get_current_session(
    token: str | None = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_async_session),
) -> AdminSession | None:
    """Return the caller's live admin session, or None."""
    if token is None:
        return None
    return await session_service.validate_session(db, token)


async def require_admin(
    settings: Settings = Depends(get_settings),
    token: str | None = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Gate a mutating route behind a valid admin session.

    Passes through when auth is disabled.

    Raises:
        AuthError: If auth is enabled and the token is missing, unknown, or expired.
    """
    if not settings.auth_enabled:
        return

    if token is None:
        raise AuthError("Not authenticated")

    if await session_service.validate_session(db, token) is None:
        raise AuthError("Invalid or expired session")
