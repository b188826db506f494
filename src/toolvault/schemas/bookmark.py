"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from toolvault.schemas.validators import as_utc


def empty_if_none(value: str | None) -> str:
    """Store optional text fields as empty strings rather than NULL."""
    return "" if value is None else value


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    Only presence is checked: url is free text and is not parsed as a URL.
    """

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: str | None = ""
    logo: str | None = ""

    @field_validator("description", "logo")
    @classmethod
    def default_empty(cls, v: str | None) -> str:
        """Default description and logo to empty strings."""
        return empty_if_none(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for a partial bookmark update.

    Fields omitted from the request body are left unchanged. Services read
    ``model_dump(exclude_unset=True)`` to tell omitted fields from supplied ones.
    """

    name: str | None = Field(default=None, min_length=1)
    url: str | None = Field(default=None, min_length=1)
    description: str | None = None
    logo: str | None = None

    @model_validator(mode="after")
    def check_required_not_null(self) -> "BookmarkUpdate":
        """Reject explicit nulls for name and url, which must stay non-empty."""
        for field_name in ("name", "url"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    @field_validator("description", "logo")
    @classmethod
    def null_to_empty(cls, v: str | None) -> str:
        """An explicit null clears description/logo to an empty string."""
        return empty_if_none(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    url: str
    description: str
    logo: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps from the database as UTC."""
        return as_utc(v)


class MessageResponse(BaseModel):
    """Confirmation body for operations that return no record."""

    message: str
