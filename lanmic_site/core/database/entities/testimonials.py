"""
Testimonial entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_datetime_column, utc_now


class TestimonialBase(Base):
    """Base fields for a customer testimonial."""

    name: str = Field(max_length=255)
    position: Optional[str] = Field(default=None, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(max_length=2000)
    image: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = Field(default=True, index=True)
    display_order: int = Field(default=0)


class Testimonial(TestimonialBase, table=True):
    """Persistent testimonial.

    Table: testimonials
    """

    __tablename__ = "testimonials"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    created_at: datetime = Field(default_factory=utc_now, sa_type=utc_datetime_column())
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=utc_datetime_column(), sa_column_kwargs={"onupdate": utc_now}
    )
