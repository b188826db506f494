"""Admin session model backing the login token registry."""
from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from toolvault.models.base import Base, TimestampMixin, UUIDv7Mixin


class AdminSession(Base, UUIDv7Mixin, TimestampMixin):
    """
    A logged-in admin session.

    Tokens are stored hashed - plaintext is only returned once at login.
    The token_prefix allows identification in logs without exposing the token.
    """

    __tablename__ = "admin_sessions"

    token_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        index=True,
        comment="SHA-256 hash of the session token",
    )
    token_prefix: Mapped[str] = mapped_column(
        String(12),
        comment="First 12 chars for identification, e.g., 'tv_abc123456'",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the session has passed its expiry time."""
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        # Handle both timezone-aware and naive datetimes (SQLite drops the offset)
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= now
