"""
Content repositories.

One repository per public content table. They share owner scoping and the
public listing query from :class:`OwnedContentRepository`; only the public
flag and ordering differ.
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.blog_posts import BlogPost
from ..entities.executives import Executive
from ..entities.team_members import TeamMember
from ..entities.testimonials import Testimonial
from .base import OwnedContentRepository


class BlogPostRepository(OwnedContentRepository[BlogPost]):
    """Blog posts; public when published, newest first."""

    public_flag = "published"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BlogPost)

    def default_order(self) -> Sequence[Any]:
        return (BlogPost.created_at.desc(), BlogPost.id.desc())


class TeamMemberRepository(OwnedContentRepository[TeamMember]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TeamMember)


class ExecutiveRepository(OwnedContentRepository[Executive]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Executive)


class TestimonialRepository(OwnedContentRepository[Testimonial]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Testimonial)
