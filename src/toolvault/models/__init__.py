"""SQLAlchemy models."""
from toolvault.models.admin_session import AdminSession
from toolvault.models.base import Base, TimestampMixin, UUIDv7Mixin
from toolvault.models.bookmark import Bookmark

__all__ = [
    "AdminSession",
    "Base",
    "Bookmark",
    "TimestampMixin",
    "UUIDv7Mixin",
]
