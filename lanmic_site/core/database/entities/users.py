"""
User and refresh token entity models.

A user row is created by the first registration step with only an email and
an OTP; username and password hash are filled in once the email is verified.
The same row carries the transient state of the password reset and email
change flows.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, as_utc, utc_datetime_column, utc_now


class UserBase(Base):
    """Base fields for a dashboard user."""

    email: str = Field(max_length=255, unique=True, index=True, description="Login email address")
    username: Optional[str] = Field(default=None, max_length=50, unique=True, index=True)
    is_verified: bool = Field(default=False, description="Whether the email address has been confirmed")


class User(UserBase, table=True):
    """Persistent dashboard user.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: Optional[str] = Field(default=None, max_length=255)

    # Registration / password reset OTP
    otp: Optional[str] = Field(default=None, max_length=10)
    otp_expires_at: Optional[datetime] = Field(default=None, sa_type=utc_datetime_column())
    reset_otp_verified: bool = Field(default=False)

    # Pending email change
    pending_email: Optional[str] = Field(default=None, max_length=255)
    email_change_otp: Optional[str] = Field(default=None, max_length=10)
    email_change_otp_expires_at: Optional[datetime] = Field(default=None, sa_type=utc_datetime_column())
    email_change_current_verified: bool = Field(default=False)
    email_change_new_verified: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, sa_type=utc_datetime_column())
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=utc_datetime_column(), sa_column_kwargs={"onupdate": utc_now}
    )

    @property
    def is_registered(self) -> bool:
        """True once the username and password step has been completed."""
        return bool(self.username and self.password_hash)

    def clear_email_change(self) -> None:
        self.pending_email = None
        self.email_change_otp = None
        self.email_change_otp_expires_at = None
        self.email_change_current_verified = False
        self.email_change_new_verified = False

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, verified={self.is_verified})"


class RefreshToken(Base, table=True):
    """Opaque refresh token issued at login and rotated on refresh.

    Table: refresh_tokens
    """

    __tablename__ = "refresh_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    token: str = Field(max_length=128, unique=True, index=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    expires_at: datetime = Field(sa_type=utc_datetime_column())
    is_revoked: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=utc_datetime_column())

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return as_utc(self.expires_at) < (now or utc_now())
