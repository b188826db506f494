"""Admin login, logout, and session check endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.api.dependencies import get_async_session, get_settings
from toolvault.core.auth import get_bearer_token, get_current_session
from toolvault.core.config import Settings
from toolvault.models.admin_session import AdminSession
from toolvault.schemas.auth import AuthCheckResponse, LoginRequest, LoginResponse
from toolvault.schemas.bookmark import MessageResponse
from toolvault.schemas.errors import ERROR_RESPONSES
from toolvault.services import session_service

router = APIRouter(tags=["auth"], responses=ERROR_RESPONSES)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> LoginResponse:
    """
    Exchange the admin email and password for a session token.

    IMPORTANT: The plaintext token is only returned once.
    """
    admin_session, plaintext = await session_service.login(
        db, settings, data.email, data.password,
    )
    return LoginResponse(token=plaintext, expires_at=admin_session.expires_at)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str | None = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """End the caller's session. Succeeds even if the token is unknown."""
    if token is not None:
        await session_service.revoke_session(db, token)
    return MessageResponse(message="Logged out")


@router.get("/auth/check", response_model=AuthCheckResponse)
async def check_auth(
    admin_session: AdminSession | None = Depends(get_current_session),
) -> AuthCheckResponse:
    """Report whether the caller's bearer token is a live admin session."""
    return AuthCheckResponse(authenticated=admin_session is not None)
