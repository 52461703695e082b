"""
Shared building blocks for API I/O models.

Request and response bodies use camelCase keys on the wire while the Python
attributes stay snake_case.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PASSWORD_MIN_LENGTH = 8
PASSWORD_RULE_MESSAGE = (
    "Password must contain at least one uppercase letter, one lowercase letter, "
    "one number and one special character (@$!%*?&)"
)
_PASSWORD_CLASSES = (r"[a-z]", r"[A-Z]", r"\d", r"[@$!%*?&]")


def check_password_strength(value: str) -> str:
    """Pydantic validator body for new passwords."""
    if not all(re.search(pattern, value) for pattern in _PASSWORD_CLASSES):
        raise ValueError(PASSWORD_RULE_MESSAGE)
    return value


class CamelModel(BaseModel):
    """Base model serializing to and accepting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(CamelModel):
    message: str = Field(description="Human readable outcome")


class ErrorResponse(BaseModel):
    """Uniform error envelope returned for every failed request."""

    statusCode: int
    timestamp: str
    path: str
    method: str
    message: list[str]
    error: str
