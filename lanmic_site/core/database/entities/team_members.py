"""
Team member entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_datetime_column, utc_now


class TeamMemberBase(Base):
    """Base fields for a team member card."""

    name: str = Field(max_length=255)
    position: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    image: Optional[str] = Field(default=None, max_length=500)
    department: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True, index=True)
    display_order: int = Field(default=0)


class TeamMember(TeamMemberBase, table=True):
    """Persistent team member.

    Table: team_members
    """

    __tablename__ = "team_members"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    created_at: datetime = Field(default_factory=utc_now, sa_type=utc_datetime_column())
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=utc_datetime_column(), sa_column_kwargs={"onupdate": utc_now}
    )
