"""Pydantic schemas for user endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserResponse(BaseModel):
    """Response model for the current user's info."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
