"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

engine = create_engine(settings.database.url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Dependency returning the session factory itself.

    For endpoints that must not hold a request-scoped session, such as
    long-lived streams, and open a short session of their own instead.
    """
    return async_session_maker


async def init_db() -> None:
    """
    Initialize the database.

    Alembic migrations own the schema in production. When
    ``DATABASE_AUTO_CREATE`` is on, missing tables are created from metadata
    so a fresh development checkout runs without a migration step.
    """
    if not settings.database.auto_create:
        logger.info("Skipping table creation; schema is managed by Alembic migrations")
        return
    await create_all(engine)
