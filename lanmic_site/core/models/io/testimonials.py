"""
Testimonial I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class TestimonialRead(CamelModel):
    id: int
    name: str
    position: Optional[str] = None
    company: Optional[str] = None
    content: str
    image: Optional[str] = None
    is_active: bool
    display_order: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class TestimonialCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    position: Optional[str] = Field(default=None, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(min_length=1, max_length=2000)
    image: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = True
    display_order: int = Field(default=0, ge=0)


class TestimonialUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[str] = Field(default=None, max_length=255)
    company: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    image: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None
    display_order: Optional[int] = Field(default=None, ge=0)
