"""Shared fixtures for unit tests: an in-memory database and a recording email service."""

from __future__ import annotations

from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from lanmic_site.core.database import Base
from lanmic_site.core.database import entities  # noqa: F401
from lanmic_site.core.database.entities.users import User
from lanmic_site.server.core.config import SMTPConfig
from lanmic_site.server.services.email_service import EmailDeliveryError, EmailService
from lanmic_site.server.services.security import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "Str0ng@Pass"


class RecordingEmailService(EmailService):
    """Email service that keeps outgoing messages in memory instead of using SMTP."""

    def __init__(self) -> None:
        super().__init__(
            SMTPConfig(
                host="smtp.mock",
                port=587,
                user="admin@example.com",
                password="secret",
                contact_recipient="info@example.com",
            )
        )
        self.messages: List = []
        self.otps: Dict[str, str] = {}
        self.fail_with: Optional[str] = None

    async def send(self, msg) -> None:
        if self.fail_with:
            raise EmailDeliveryError(self.fail_with)
        self.messages.append(msg)

    async def send_registration_otp(self, email: str, otp: str, expires_in_minutes: int) -> None:
        self.otps[email] = otp
        await super().send_registration_otp(email, otp, expires_in_minutes)

    async def send_password_reset_otp(self, email: str, otp: str, expires_in_minutes: int) -> None:
        self.otps[email] = otp
        await super().send_password_reset_otp(email, otp, expires_in_minutes)

    async def send_email_change_otp(self, email: str, otp: str, expires_in_minutes: int) -> None:
        self.otps[email] = otp
        await super().send_email_change_otp(email, otp, expires_in_minutes)

    def recipients(self) -> List[str]:
        return [msg["To"] for msg in self.messages]


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def make_user(session: AsyncSession):
    """Factory persisting a user; defaults to a verified, fully registered account."""

    async def _make_user(
        email: str = "owner@example.com",
        username: Optional[str] = "owner",
        password: Optional[str] = DEFAULT_PASSWORD,
        is_verified: bool = True,
    ) -> User:
        user = User(
            email=email,
            username=username,
            password_hash=hash_password(password) if password else None,
            is_verified=is_verified,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user
