"""
Blog post entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_datetime_column, utc_now


class BlogPostBase(Base):
    """Base fields for a blog post."""

    title: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    content: str = Field(sa_type=Text)
    category: str = Field(max_length=100)
    read_time: Optional[str] = Field(default=None, max_length=50)
    author_name: str = Field(max_length=255)
    author_position: Optional[str] = Field(default=None, max_length=255)
    author_image: Optional[str] = Field(default=None, max_length=500)
    blog_image: Optional[str] = Field(default=None, max_length=500)
    published: bool = Field(default=False, index=True)


class BlogPost(BlogPostBase, table=True):
    """Persistent blog post owned by a dashboard user.

    Table: blog_posts
    """

    __tablename__ = "blog_posts"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    created_at: datetime = Field(default_factory=utc_now, sa_type=utc_datetime_column())
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=utc_datetime_column(), sa_column_kwargs={"onupdate": utc_now}
    )
