"""Service layer for bookmark CRUD operations."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.models.bookmark import Bookmark
from toolvault.schemas.bookmark import BookmarkCreate, BookmarkUpdate
from toolvault.services.exceptions import NotFoundError

logger = logging.getLogger(__name__)


async def list_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """
    Get every bookmark.

    No filtering or pagination. Ordered by creation time, then id (UUIDv7 is
    time-ordered) so the result follows insertion order.
    """
    result = await db.execute(
        select(Bookmark).order_by(Bookmark.created_at, Bookmark.id),
    )
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: UUID) -> Bookmark | None:
    """Get a bookmark by ID. Returns None if not found."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """
    Create a new bookmark.

    Presence of name and url is enforced by BookmarkCreate before this runs.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        name=data.name,
        url=data.url,
        description=data.description,
        logo=data.logo,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("Created bookmark %s (%s)", bookmark.id, bookmark.name)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: UUID,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply a partial update to a bookmark.

    Only fields explicitly present in ``data`` are changed.

    Raises:
        NotFoundError: If no bookmark has this ID.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise NotFoundError("Bookmark")

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(db: AsyncSession, bookmark_id: UUID) -> None:
    """
    Permanently delete a bookmark.

    Raises:
        NotFoundError: If no bookmark has this ID.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise NotFoundError("Bookmark")

    await db.delete(bookmark)
    await db.flush()
    logger.info("Deleted bookmark %s", bookmark_id)
