"""Bookmark CRUD endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_service
from services.exceptions import BookmarkConflictError, BookmarkNotFoundError

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

# Ids must fit the INTEGER primary key column on every supported database
BookmarkId = Annotated[int, Path(ge=1, le=2**31 - 1)]


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks owned by the current user."""
    bookmarks = await bookmark_service.get_bookmarks(db, current_user.id)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.get("/{bookmark_id}", response_model=BookmarkResponse | None)
async def get_bookmark(
    bookmark_id: BookmarkId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse | None:
    """
    Get a single bookmark by ID.

    Returns `null` (200) when the bookmark doesn't exist or belongs to another user.
    """
    bookmark = await bookmark_service.get_bookmark(db, current_user.id, bookmark_id)
    if bookmark is None:
        return None
    return BookmarkResponse.model_validate(bookmark)


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark."""
    try:
        bookmark = await bookmark_service.create_bookmark(db, current_user.id, data)
    except BookmarkConflictError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: BookmarkId,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Update any subset of a bookmark's title, description and link."""
    try:
        bookmark = await bookmark_service.update_bookmark(
            db, current_user.id, bookmark_id, data,
        )
    except BookmarkNotFoundError:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: BookmarkId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    try:
        await bookmark_service.delete_bookmark(db, current_user.id, bookmark_id)
    except BookmarkNotFoundError:
        raise HTTPException(status_code=404, detail="Bookmark not found")
