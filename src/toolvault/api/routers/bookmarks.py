"""Bookmark CRUD endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.api.dependencies import get_async_session
from toolvault.core.auth import require_admin
from toolvault.schemas.bookmark import (
    BookmarkCreate,
    BookmarkResponse,
    BookmarkUpdate,
    MessageResponse,
)
from toolvault.schemas.errors import ERROR_RESPONSES
from toolvault.services import bookmark_service

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"], responses=ERROR_RESPONSES)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List every bookmark. Public, no pagination."""
    bookmarks = await bookmark_service.list_bookmarks(db)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_bookmark(
    data: BookmarkCreate,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    **Requires an admin session when auth is enabled.**
    """
    bookmark = await bookmark_service.create_bookmark(db, data)
    return BookmarkResponse.model_validate(bookmark)


@router.put(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    dependencies=[Depends(require_admin)],
)
async def update_bookmark(
    bookmark_id: UUID,
    data: BookmarkUpdate,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Update a bookmark. Fields omitted from the body are left unchanged.

    **Requires an admin session when auth is enabled.**
    """
    bookmark = await bookmark_service.update_bookmark(db, bookmark_id, data)
    return BookmarkResponse.model_validate(bookmark)


@router.delete(
    "/{bookmark_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_bookmark(
    bookmark_id: UUID,
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """
    Permanently delete a bookmark.

    **Requires an admin session when auth is enabled.**
    """
    await bookmark_service.delete_bookmark(db, bookmark_id)
    return MessageResponse(message="Bookmark deleted")
