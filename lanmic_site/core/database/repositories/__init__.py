"""
Repositories for the database layer.

Each repository wraps an ``AsyncSession`` and exposes the queries its API
routers and services need.
"""

from .base import BaseRepository, OwnedContentRepository, QueryBuilder
from .content import (
    BlogPostRepository,
    ExecutiveRepository,
    TeamMemberRepository,
    TestimonialRepository,
)
from .users import RefreshTokenRepository, UserRepository

__all__ = [
    "BaseRepository",
    "BlogPostRepository",
    "ExecutiveRepository",
    "OwnedContentRepository",
    "QueryBuilder",
    "RefreshTokenRepository",
    "TeamMemberRepository",
    "TestimonialRepository",
    "UserRepository",
]
