"""
Executive leadership I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class ExecutiveRead(CamelModel):
    id: int
    name: str
    position: str
    description: str
    image: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    is_active: bool
    display_order: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class ExecutiveCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    image: Optional[str] = Field(default=None, max_length=500)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    twitter_url: Optional[str] = Field(default=None, max_length=500)
    is_active: bool = True
    display_order: int = Field(default=0, ge=0)


class ExecutiveUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    image: Optional[str] = Field(default=None, max_length=500)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    twitter_url: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None
    display_order: Optional[int] = Field(default=None, ge=0)
