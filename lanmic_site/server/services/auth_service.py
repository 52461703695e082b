"""
Authentication service.

Implements the account lifecycle on top of the user and refresh token
repositories:

- three-step registration (email OTP, verification, username/password)
- login, refresh token rotation and logout
- password reset through a 10-minute OTP, and password change
- two-sided OTP verified email change

Errors are raised as :mod:`.errors` subclasses so routers stay thin.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lanmic_site.core.database.base import as_utc, utc_now
from lanmic_site.core.database.entities.users import RefreshToken, User
from lanmic_site.core.database.repositories import RefreshTokenRepository, UserRepository
from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import settings

from .email_service import EmailDeliveryError, EmailService
from .errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from .security import (
    create_access_token,
    generate_otp,
    generate_refresh_token,
    hash_password,
    refresh_token_lifetime,
    verify_password,
)

logger = get_logger(__name__)


@dataclass
class IssuedTokens:
    access_token: str
    refresh_token: str
    user: User
    remember_me: bool = False


def check_otp(stored: Optional[str], expires_at: Optional[datetime], supplied: str) -> None:
    """Validate a submitted OTP against the stored one.

    Raises:
        BadRequestError: no OTP pending, mismatch, or past its expiry
    """
    if not stored:
        raise BadRequestError("No OTP found for this user")
    if not secrets.compare_digest(stored.encode(), supplied.encode()):
        raise BadRequestError("Invalid OTP")
    if expires_at is None or as_utc(expires_at) < utc_now():
        raise BadRequestError("OTP has expired")


class AuthService:
    """Account, session and credential operations."""

    def __init__(self, session: AsyncSession, email_service: EmailService) -> None:
        self.users = UserRepository(session)
        self.tokens = RefreshTokenRepository(session)
        self.email_service = email_service

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _expiry(minutes: int) -> datetime:
        return utc_now() + timedelta(minutes=minutes)

    async def _deliver(self, send, *args) -> None:
        try:
            await send(*args)
        except EmailDeliveryError as e:
            logger.error(f"OTP delivery failed: {e}")
            raise ServiceUnavailableError("Failed to send OTP email. Please try again later.") from e

    async def _issue_tokens(self, user: User, remember_me: bool = False) -> IssuedTokens:
        refresh = RefreshToken(
            token=generate_refresh_token(),
            user_id=user.id,
            expires_at=utc_now() + refresh_token_lifetime(remember_me),
        )
        await self.tokens.create(refresh)
        return IssuedTokens(
            access_token=create_access_token(user.id),
            refresh_token=refresh.token,
            user=user,
            remember_me=remember_me,
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def send_registration_otp(self, email: str) -> int:
        """Create or refresh the pending registration and email its OTP.

        Returns:
            OTP lifetime in minutes
        """
        email = email.lower()
        minutes = settings.auth.otp_expiry_minutes
        user = await self.users.get_by_email(email)
        if user and user.is_verified:
            raise ConflictError("User already exists and is verified")

        otp = generate_otp()
        if user is None:
            user = await self.users.create(User(email=email, otp=otp, otp_expires_at=self._expiry(minutes)))
        else:
            user.otp = otp
            user.otp_expires_at = self._expiry(minutes)
            user = await self.users.update(user)

        logger.info(f"Registration OTP generated for {email}")
        await self._deliver(self.email_service.send_registration_otp, email, otp, minutes)
        return minutes

    async def verify_registration_otp(self, email: str, otp: str) -> User:
        user = await self.users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")
        check_otp(user.otp, user.otp_expires_at, otp)
        user.is_verified = True
        user.otp = None
        user.otp_expires_at = None
        return await self.users.update(user)

    async def complete_registration(self, email: str, username: str, password: str, confirm_password: str) -> User:
        if password != confirm_password:
            raise BadRequestError("Passwords do not match")
        user = await self.users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found. Please verify your email first.")
        if not user.is_verified:
            raise BadRequestError("User not verified. Please verify your email first.")
        if user.is_registered:
            raise ConflictError("User already registered")
        if await self.users.get_by_username(username):
            raise ConflictError("Username already taken")

        user.username = username
        user.password_hash = hash_password(password)
        logger.info(f"Registration completed for user {user.id}")
        return await self.users.update(user)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str, remember_me: bool = False) -> IssuedTokens:
        user = await self.users.get_by_email(email)
        if not user:
            raise UnauthorizedError("Invalid credentials")
        if not user.is_verified:
            raise UnauthorizedError("User not verified")
        if not user.is_registered:
            raise UnauthorizedError("User not fully registered")
        if not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")

        await self.tokens.delete_expired(user_id=user.id)
        logger.info(f"User {user.id} logged in")
        return await self._issue_tokens(user, remember_me)

    async def refresh(self, token: str) -> IssuedTokens:
        """Rotate a refresh token: the presented token is revoked and a new pair issued."""
        record = await self.tokens.get_by_token(token)
        if not record:
            raise UnauthorizedError("Invalid refresh token")
        if record.is_revoked:
            raise UnauthorizedError("Refresh token has been revoked")
        if record.is_expired():
            raise UnauthorizedError("Refresh token has expired")
        user = await self.users.get_by_id(record.user_id)
        if not user or not user.is_verified:
            raise UnauthorizedError("User not verified")

        remember_me = (as_utc(record.expires_at) - as_utc(record.created_at)) > refresh_token_lifetime()
        await self.tokens.revoke(record)
        return await self._issue_tokens(user, remember_me)

    async def logout(self, user: User, token: Optional[str]) -> None:
        if not token:
            return
        record = await self.tokens.get_by_token(token)
        if record and record.user_id == user.id and not record.is_revoked:
            await self.tokens.revoke(record)
            logger.info(f"User {user.id} logged out")

    # ------------------------------------------------------------------
    # Password reset / change
    # ------------------------------------------------------------------

    async def forgot_password(self, email: str) -> int:
        minutes = settings.auth.password_reset_otp_expiry_minutes
        user = await self.users.get_by_email(email)
        if not user or not user.is_registered:
            raise NotFoundError("User not found")

        otp = generate_otp()
        user.otp = otp
        user.otp_expires_at = self._expiry(minutes)
        user.reset_otp_verified = False
        await self.users.update(user)
        await self._deliver(self.email_service.send_password_reset_otp, user.email, otp, minutes)
        return minutes

    async def verify_password_reset_otp(self, email: str, otp: str) -> User:
        user = await self.users.get_by_email(email)
        if not user or not user.is_registered:
            raise NotFoundError("User not found")
        check_otp(user.otp, user.otp_expires_at, otp)
        user.otp = None
        user.otp_expires_at = None
        user.reset_otp_verified = True
        return await self.users.update(user)

    async def reset_password(self, email: str, new_password: str, confirm_password: str) -> User:
        if new_password != confirm_password:
            raise BadRequestError("Passwords do not match")
        user = await self.users.get_by_email(email)
        if not user or not user.is_registered:
            raise NotFoundError("User not found")
        if not user.reset_otp_verified:
            raise BadRequestError("Password reset not verified. Please verify the OTP first.")

        user.password_hash = hash_password(new_password)
        user.reset_otp_verified = False
        user = await self.users.update(user)
        await self.tokens.revoke_all_for_user(user.id)
        await self.email_service.send_password_reset_success(user.email)
        logger.info(f"Password reset for user {user.id}")
        return user

    async def change_password(
        self, user: User, current_password: str, new_password: str, confirm_password: str
    ) -> User:
        if new_password != confirm_password:
            raise BadRequestError("Passwords do not match")
        if not verify_password(current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        if current_password == new_password:
            raise BadRequestError("New password must be different from the current password")
        user.password_hash = hash_password(new_password)
        return await self.users.update(user)

    # ------------------------------------------------------------------
    # Email change
    # ------------------------------------------------------------------

    async def send_current_email_otp(self, user: User) -> int:
        minutes = settings.auth.otp_expiry_minutes
        otp = generate_otp()
        user.clear_email_change()
        user.email_change_otp = otp
        user.email_change_otp_expires_at = self._expiry(minutes)
        await self.users.update(user)
        await self._deliver(self.email_service.send_email_change_otp, user.email, otp, minutes)
        return minutes

    async def verify_current_email_otp(self, user: User, otp: str) -> User:
        check_otp(user.email_change_otp, user.email_change_otp_expires_at, otp)
        user.email_change_otp = None
        user.email_change_otp_expires_at = None
        user.email_change_current_verified = True
        return await self.users.update(user)

    async def send_new_email_otp(self, user: User, new_email: str) -> str:
        new_email = new_email.lower()
        if not user.email_change_current_verified:
            raise BadRequestError("Current email not verified. Please verify your current email first.")
        if new_email == user.email:
            raise BadRequestError("New email must be different from the current email")
        if await self.users.get_by_email(new_email):
            raise ConflictError("Email already in use")

        minutes = settings.auth.otp_expiry_minutes
        otp = generate_otp()
        user.pending_email = new_email
        user.email_change_otp = otp
        user.email_change_otp_expires_at = self._expiry(minutes)
        user.email_change_new_verified = False
        await self.users.update(user)
        await self._deliver(self.email_service.send_email_change_otp, new_email, otp, minutes)
        return new_email

    async def verify_new_email_otp(self, user: User, otp: str) -> User:
        if not user.pending_email:
            raise BadRequestError("No pending email change")
        check_otp(user.email_change_otp, user.email_change_otp_expires_at, otp)
        user.email_change_otp = None
        user.email_change_otp_expires_at = None
        user.email_change_new_verified = True
        return await self.users.update(user)

    async def confirm_email_change(self, user: User, new_email: str, new_password: str) -> User:
        new_email = new_email.lower()
        if not (
            user.email_change_current_verified
            and user.email_change_new_verified
            and user.pending_email == new_email
        ):
            raise BadRequestError("Email change not verified")
        if await self.users.get_by_email(new_email):
            raise ConflictError("Email already in use")

        old_email = user.email
        user.email = new_email
        user.password_hash = hash_password(new_password)
        user.clear_email_change()
        user = await self.users.update(user)
        await self.tokens.revoke_all_for_user(user.id)
        logger.info(f"User {user.id} changed email from {old_email} to {new_email}")
        return user
