"""
Blog post I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class BlogPostRead(CamelModel):
    """Schema for reading a blog post from the API."""

    id: int
    title: str
    description: str
    content: str
    category: str
    read_time: Optional[str] = None
    author_name: str
    author_position: Optional[str] = None
    author_image: Optional[str] = None
    blog_image: Optional[str] = None
    published: bool
    user_id: int
    created_at: datetime
    updated_at: datetime


class BlogPostCreate(CamelModel):
    """Schema for creating a blog post."""

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=100)
    read_time: Optional[str] = Field(default=None, max_length=50, description="e.g. '5 min read'")
    author_name: str = Field(min_length=1, max_length=255)
    author_position: Optional[str] = Field(default=None, max_length=255)
    author_image: Optional[str] = Field(default=None, max_length=500)
    blog_image: Optional[str] = Field(default=None, max_length=500)
    published: bool = False


class BlogPostUpdate(CamelModel):
    """Schema for a partial blog post update; only sent fields change."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    read_time: Optional[str] = Field(default=None, max_length=50)
    author_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    author_position: Optional[str] = Field(default=None, max_length=255)
    author_image: Optional[str] = Field(default=None, max_length=500)
    blog_image: Optional[str] = Field(default=None, max_length=500)
    published: Optional[bool] = None
