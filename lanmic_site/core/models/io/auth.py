"""
Authentication I/O models for API requests and responses.

These models define the contract of the registration, login, token refresh,
password reset, password change and email change endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from .common import PASSWORD_MIN_LENGTH, CamelModel, check_password_strength

OTP_PATTERN = r"^[0-9]{6}$"
USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class UserRead(CamelModel):
    """Public view of a user."""

    id: int
    email: str
    username: Optional[str] = None
    is_verified: bool


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class RegisterEmailRequest(CamelModel):
    email: EmailStr


class VerifyOtpRequest(CamelModel):
    email: EmailStr
    otp: str = Field(pattern=OTP_PATTERN, description="6-digit one-time passcode")


class RegisterDetailsRequest(CamelModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=20, pattern=USERNAME_PATTERN)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)
    confirm_password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)


class OtpSentResponse(CamelModel):
    message: str
    expires_in_minutes: int


class OtpVerifiedResponse(CamelModel):
    message: str
    can_proceed: bool = True


class RegisterResponse(CamelModel):
    message: str
    user: UserRead


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    remember_me: bool = False


class RefreshTokenRequest(CamelModel):
    refresh_token: Optional[str] = None


class AuthTokensResponse(CamelModel):
    access_token: str
    refresh_token: str
    user: UserRead


# ---------------------------------------------------------------------------
# Password reset and change
# ---------------------------------------------------------------------------


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    email: EmailStr
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)
    confirm_password: str = Field(min_length=1)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)
    confirm_password: str = Field(min_length=1)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)


# ---------------------------------------------------------------------------
# Email change
# ---------------------------------------------------------------------------


class EmailChangeOtpRequest(CamelModel):
    otp: str = Field(pattern=OTP_PATTERN)


class NewEmailRequest(CamelModel):
    new_email: EmailStr


class NewEmailOtpResponse(CamelModel):
    message: str
    new_email: str


class ConfirmEmailChangeRequest(CamelModel):
    new_email: EmailStr
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)


class EmailChangeConfirmedResponse(CamelModel):
    message: str
    requires_reauth: bool = True
    user: UserRead
