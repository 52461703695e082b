"""
Executive leadership entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_datetime_column, utc_now


class ExecutiveBase(Base):
    """Base fields for an executive leadership card."""

    name: str = Field(max_length=100)
    position: str = Field(max_length=200)
    description: str = Field(max_length=1000)
    image: Optional[str] = Field(default=None, max_length=500)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    twitter_url: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = Field(default=True, index=True)
    display_order: int = Field(default=0)


class Executive(ExecutiveBase, table=True):
    """Persistent executive leadership entry.

    Table: executive_leadership
    """

    __tablename__ = "executive_leadership"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    created_at: datetime = Field(default_factory=utc_now, sa_type=utc_datetime_column())
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=utc_datetime_column(), sa_column_kwargs={"onupdate": utc_now}
    )
