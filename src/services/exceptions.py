"""Shared exceptions for service layer operations."""


class BookmarkNotFoundError(Exception):
    """
    Raised when a bookmark does not exist for the requesting user.

    Covers both "no such id" and "id belongs to another user" so callers
    cannot tell the two apart.
    """

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark not found")


class BookmarkConflictError(Exception):
    """Raised when the store reports a uniqueness violation while creating a bookmark."""

    def __init__(self, message: str = "Bookmark already exists") -> None:
        super().__init__(message)
