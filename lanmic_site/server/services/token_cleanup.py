"""
Expired refresh token cleanup.

Login already purges the signing-in user's expired tokens; the periodic task
started from the application lifespan sweeps whatever is left over.
"""

import asyncio
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lanmic_site.core.database.repositories import RefreshTokenRepository
from lanmic_site.core.logging_config import get_logger

logger = get_logger(__name__)


class TokenCleanupService:
    """Delete refresh tokens whose expiry has passed."""

    def __init__(self, session_factory: Callable[[], AsyncSession] | async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def cleanup_expired_tokens(self) -> int:
        async with self.session_factory() as session:
            removed = await RefreshTokenRepository(session).delete_expired()
        if removed:
            logger.info(f"Cleaned up {removed} expired refresh tokens")
        return removed

    async def cleanup_expired_tokens_for_user(self, user_id: int) -> int:
        async with self.session_factory() as session:
            removed = await RefreshTokenRepository(session).delete_expired(user_id=user_id)
        logger.debug(f"Removed {removed} expired refresh tokens for user {user_id}")
        return removed

    async def run_periodically(self, interval_seconds: float) -> None:
        """Sweep forever; cancel the task to stop. Failures are logged and retried next cycle."""
        logger.info(f"Token cleanup task started (interval={interval_seconds}s)")
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.cleanup_expired_tokens()
            except Exception as e:
                logger.error(f"Failed to clean up expired tokens: {e}", exc_info=True)


def start_cleanup_task(service: TokenCleanupService, interval_seconds: float) -> Optional[asyncio.Task]:
    if interval_seconds <= 0:
        logger.info("Token cleanup task disabled")
        return None
    return asyncio.create_task(service.run_periodically(interval_seconds), name="refresh-token-cleanup")
