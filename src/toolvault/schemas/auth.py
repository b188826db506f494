"""Pydantic schemas for admin session endpoints."""
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from toolvault.schemas.validators import as_utc


class LoginRequest(BaseModel):
    """Admin credentials submitted to POST /login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """
    Response after a successful login.

    IMPORTANT: The `token` field is the plaintext session token and is only
    returned here. Only its hash is stored.
    """

    token: str
    expires_at: datetime

    @field_validator("expires_at")
    @classmethod
    def expires_at_utc(cls, v: datetime) -> datetime:
        """Treat a naive expiry from the database as UTC."""
        return as_utc(v)


class AuthCheckResponse(BaseModel):
    """Whether the caller's bearer token is a live admin session."""

    authenticated: bool
