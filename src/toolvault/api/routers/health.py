"""Liveness endpoint reporting catalog size."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.api.dependencies import get_async_session, get_settings
from toolvault.core.config import Settings
from toolvault.schemas.errors import ErrorResponse
from toolvault.services.seed_service import count_bookmarks

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Running server with a readable bookmarks table."""

    status: str
    bookmarks: int
    auth_enabled: bool


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": ErrorResponse, "description": "Database unavailable"}},
)
async def health_check(
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Report ``ok`` with the bookmark count.

    A failing database query surfaces through the SQLAlchemyError handler as
    500 ``{"error": "Database error"}``.
    """
    return HealthResponse(
        status="ok",
        bookmarks=await count_bookmarks(db),
        auth_enabled=settings.auth_enabled,
    )
