"""
Base classes for database entities.

All table entities inherit from :class:`Base` so they share one SQLModel
metadata object, which Alembic and ``create_all`` operate on.

Timestamps are timezone-aware UTC everywhere and stored in
``DateTime(timezone=True)`` columns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import SQLModel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive value.

    SQLite returns timestamps without an offset even for timezone-aware
    columns; they were written as UTC.
    """
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_datetime_column() -> DateTime:
    """Column type shared by every timestamp field (``timestamptz`` on PostgreSQL)."""
    return DateTime(timezone=True)


class Base(SQLModel):
    """Base class for all database entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)
