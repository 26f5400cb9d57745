"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from core.config import get_settings


def validate_title(title: str) -> str:
    """Strip a title and enforce non-empty / max length."""
    settings = get_settings()
    stripped = title.strip()
    if not stripped:
        raise ValueError("Title cannot be empty")
    if len(stripped) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(stripped):,} characters).",
        )
    return stripped


def validate_link(link: str) -> str:
    """
    Strip a link and enforce non-empty / max length.

    URL well-formedness is not checked; links are stored as given.
    """
    settings = get_settings()
    stripped = link.strip()
    if not stripped:
        raise ValueError("Link cannot be empty")
    if len(stripped) > settings.max_link_length:
        raise ValueError(
            f"Link exceeds maximum length of {settings.max_link_length:,} characters "
            f"(got {len(stripped):,} characters).",
        )
    return stripped


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    title: str
    description: str | None = None
    link: str

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Validate title."""
        return validate_title(v)

    @field_validator("link")
    @classmethod
    def check_link(cls, v: str) -> str:
        """Validate link."""
        return validate_link(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Only fields present in the request body are applied (see model_dump(exclude_unset=True)).
    title and link are required columns, so an explicit null is rejected for them;
    description may be set to null to clear it.
    """

    title: str | None = None
    description: str | None = None
    link: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str:
        """Validate title if provided."""
        if v is None:
            raise ValueError("Title cannot be null")
        return validate_title(v)

    @field_validator("link")
    @classmethod
    def check_link(cls, v: str | None) -> str:
        """Validate link if provided."""
        if v is None:
            raise ValueError("Link cannot be null")
        return validate_link(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses (serialized as camelCase, e.g. userId)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    title: str
    description: str | None
    link: str
    user_id: int
    created_at: datetime
    updated_at: datetime
