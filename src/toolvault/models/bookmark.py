"""Bookmark model for the tool catalog."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from toolvault.models.base import Base, TimestampMixin, UUIDv7Mixin


class Bookmark(Base, UUIDv7Mixin, TimestampMixin):
    """
    Bookmark model - a named tool link with optional description and logo.

    No uniqueness constraint on name or url; duplicates are allowed.
    """

    __tablename__ = "bookmarks"

    # id provided by UUIDv7Mixin
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    logo: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
