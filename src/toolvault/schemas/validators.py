"""Shared validation functions for Pydantic schemas."""
from datetime import UTC, datetime


def as_utc(value: datetime) -> datetime:
    """
    Mark a naive datetime as UTC.

    SQLite returns stored timestamps without an offset; every timestamp the
    app writes is UTC, so responses always carry one.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
