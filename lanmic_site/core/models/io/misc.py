"""
I/O models for the contact form, uploads, health checks and relay events.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import EmailStr, Field

from .common import CamelModel


class ContactRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20)
    company: Optional[str] = Field(default=None, max_length=100)
    message: str = Field(min_length=1, max_length=1000)


class ContactResponse(CamelModel):
    message: str
    success: bool


class UploadResponse(CamelModel):
    message: str
    filename: str
    original_name: str
    size: int
    url: str


class DatabaseStatus(CamelModel):
    connected: bool


class RelayEvent(CamelModel):
    """Payload pushed to relay subscribers."""

    type: str = Field(description="Event name, e.g. 'blog-created'")
    data: Any = Field(default=None, description="Serialized record, or {'id': ...} for deletions")
    timestamp: datetime
