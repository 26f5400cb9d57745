"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import BookmarkConflictError, BookmarkNotFoundError

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError came from a unique constraint (PostgreSQL or SQLite)."""
    message = str(error.orig).lower()
    return "unique constraint" in message or "duplicate key" in message


async def _get_owned_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | None:
    """
    Load a bookmark by primary key, then check ownership in Python.

    A bookmark owned by someone else is returned as None, exactly like a missing one.
    """
    bookmark = await db.get(Bookmark, bookmark_id)
    if bookmark is None:
        return None
    if bookmark.user_id != user_id:
        logger.debug(
            "User %s requested bookmark %s owned by another user",
            user_id,
            bookmark_id,
        )
        return None
    return bookmark


async def get_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    """Get all bookmarks for a user, in insertion (id) order."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id),
    )
    return list(result.scalars().all())


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | None:
    """Get a bookmark by ID, scoped to user. Returns None if not found or wrong user."""
    return await _get_owned_bookmark(db, user_id, bookmark_id)


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by user_id.

    Args:
        db: Database session.
        user_id: Owner of the new bookmark (the authenticated user).
        data: Bookmark creation data.

    Returns:
        The created bookmark, refreshed with its id and timestamps.

    Raises:
        BookmarkConflictError: If the store rejects the row on a unique constraint.
            No unique constraint exists on bookmarks today, so this only fires once
            one is added (e.g. unique link per user).
        IntegrityError: Any other integrity failure (e.g. unknown user_id) is re-raised.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        description=data.description,
        link=data.link,
    )
    db.add(bookmark)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        if _is_unique_violation(e):
            logger.warning("Unique constraint violation creating bookmark for user %s", user_id)
            raise BookmarkConflictError("Bookmark already exists") from e
        raise
    await db.refresh(bookmark)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply a partial update to a bookmark.

    Only fields explicitly set in `data` are written; id and user_id never change.

    Raises:
        BookmarkNotFoundError: If the bookmark doesn't exist or belongs to another user.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await _get_owned_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> None:
    """
    Permanently delete a bookmark.

    Raises:
        BookmarkNotFoundError: If the bookmark doesn't exist or belongs to another user.
            Deleting the same id twice raises on the second call.
    """
    bookmark = await _get_owned_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)

    await db.delete(bookmark)
    await db.flush()
