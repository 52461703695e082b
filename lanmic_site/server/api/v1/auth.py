"""
Authentication API Endpoints.

Registration (email OTP, verification, account details), login, refresh token
rotation, logout, password reset/change and email change. Tokens are
returned in the body and mirrored into HttpOnly cookies.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, Request, Response

from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.auth import (
    AuthTokensResponse,
    ChangePasswordRequest,
    ConfirmEmailChangeRequest,
    EmailChangeConfirmedResponse,
    EmailChangeOtpRequest,
    ForgotPasswordRequest,
    LoginRequest,
    NewEmailOtpResponse,
    NewEmailRequest,
    OtpSentResponse,
    OtpVerifiedResponse,
    RefreshTokenRequest,
    RegisterDetailsRequest,
    RegisterEmailRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UserRead,
    VerifyOtpRequest,
)
from lanmic_site.core.models.io.common import MessageResponse
from lanmic_site.server.core.constant import REFRESH_TOKEN_COOKIE, REFRESH_TOKEN_HEADER
from lanmic_site.server.services.auth_service import IssuedTokens
from lanmic_site.server.services.cookies import clear_auth_cookies, set_auth_cookies
from lanmic_site.server.services.deps import AuthServiceDep, CurrentUser
from lanmic_site.server.services.errors import UnauthorizedError

logger = get_logger(__name__)

router = APIRouter()


def _token_response(response: Response, issued: IssuedTokens) -> AuthTokensResponse:
    set_auth_cookies(response, issued.access_token, issued.refresh_token, issued.remember_me)
    return AuthTokensResponse(
        access_token=issued.access_token,
        refresh_token=issued.refresh_token,
        user=UserRead.model_validate(issued.user),
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


@router.post(
    "/register/email",
    response_model=OtpSentResponse,
    summary="Start Registration",
    description="Send a 6-digit OTP to the given email address to start registration.",
    responses={
        409: {"description": "User already exists and is verified"},
        503: {"description": "OTP email could not be sent"},
    },
)
async def register_email(body: RegisterEmailRequest, auth: AuthServiceDep) -> OtpSentResponse:
    minutes = await auth.send_registration_otp(body.email)
    return OtpSentResponse(message="OTP sent successfully to your email", expires_in_minutes=minutes)


@router.post(
    "/register/otp",
    response_model=OtpVerifiedResponse,
    summary="Verify Registration OTP",
    description="Verify the emailed OTP; on success the email is marked verified.",
    responses={
        400: {"description": "Missing, invalid or expired OTP"},
        404: {"description": "User not found"},
    },
)
async def register_otp(body: VerifyOtpRequest, auth: AuthServiceDep) -> OtpVerifiedResponse:
    await auth.verify_registration_otp(body.email, body.otp)
    return OtpVerifiedResponse(message="OTP verified successfully", can_proceed=True)


@router.post(
    "/register/details",
    response_model=RegisterResponse,
    summary="Complete Registration",
    description="Set the username and password of a verified email.",
    responses={
        400: {"description": "Passwords do not match or email not verified"},
        404: {"description": "User not found"},
        409: {"description": "Username already taken"},
    },
)
async def register_details(body: RegisterDetailsRequest, auth: AuthServiceDep) -> RegisterResponse:
    user = await auth.complete_registration(body.email, body.username, body.password, body.confirm_password)
    return RegisterResponse(message="Registration completed successfully", user=UserRead.model_validate(user))


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@router.post(
    "/login",
    response_model=AuthTokensResponse,
    summary="Login",
    description="Authenticate with email and password. Returns an access token and a refresh token.",
    responses={401: {"description": "Invalid credentials or account not ready"}},
)
async def login(body: LoginRequest, response: Response, auth: AuthServiceDep) -> AuthTokensResponse:
    issued = await auth.login(body.email, body.password, body.remember_me)
    return _token_response(response, issued)


@router.post(
    "/refresh",
    response_model=AuthTokensResponse,
    summary="Refresh Tokens",
    description="Exchange a refresh token for a new token pair. The presented refresh token is revoked.",
    responses={401: {"description": "Invalid, revoked or expired refresh token"}},
)
async def refresh(
    request: Request,
    response: Response,
    auth: AuthServiceDep,
    body: Optional[RefreshTokenRequest] = None,
) -> AuthTokensResponse:
    token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not token:
        raise UnauthorizedError("Invalid refresh token")
    issued = await auth.refresh(token)
    return _token_response(response, issued)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
    description="Revoke the refresh token (body, x-refresh-token header or cookie) and clear auth cookies.",
    responses={401: {"description": "Missing or invalid access token"}},
)
async def logout(
    request: Request,
    response: Response,
    user: CurrentUser,
    auth: AuthServiceDep,
    body: Optional[RefreshTokenRequest] = None,
    x_refresh_token: Annotated[Optional[str], Header(alias=REFRESH_TOKEN_HEADER)] = None,
) -> MessageResponse:
    token = (body.refresh_token if body else None) or x_refresh_token or request.cookies.get(REFRESH_TOKEN_COOKIE)
    await auth.logout(user, token)
    clear_auth_cookies(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserRead, summary="Current User")
async def me(user: CurrentUser) -> UserRead:
    return UserRead.model_validate(user)


# ---------------------------------------------------------------------------
# Password reset / change
# ---------------------------------------------------------------------------


@router.post(
    "/password/forgot",
    response_model=OtpSentResponse,
    summary="Request Password Reset",
    description="Email a password reset OTP to a registered user.",
    responses={404: {"description": "User not found"}},
)
async def forgot_password(body: ForgotPasswordRequest, auth: AuthServiceDep) -> OtpSentResponse:
    minutes = await auth.forgot_password(body.email)
    return OtpSentResponse(message="Password reset OTP sent to your email", expires_in_minutes=minutes)


@router.post(
    "/password/verify-otp",
    response_model=OtpVerifiedResponse,
    summary="Verify Password Reset OTP",
)
async def verify_password_reset_otp(body: VerifyOtpRequest, auth: AuthServiceDep) -> OtpVerifiedResponse:
    await auth.verify_password_reset_otp(body.email, body.otp)
    return OtpVerifiedResponse(message="OTP verified successfully", can_proceed=True)


@router.post(
    "/password/reset",
    response_model=MessageResponse,
    summary="Reset Password",
    description="Set a new password after the reset OTP was verified. All sessions are revoked.",
)
async def reset_password(body: ResetPasswordRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.reset_password(body.email, body.new_password, body.confirm_password)
    return MessageResponse(message="Password reset successfully")


@router.post(
    "/password/change",
    response_model=MessageResponse,
    summary="Change Password",
    responses={401: {"description": "Current password is incorrect"}},
)
async def change_password(body: ChangePasswordRequest, user: CurrentUser, auth: AuthServiceDep) -> MessageResponse:
    await auth.change_password(user, body.current_password, body.new_password, body.confirm_password)
    return MessageResponse(message="Password changed successfully")


# ---------------------------------------------------------------------------
# Email change
# ---------------------------------------------------------------------------


@router.post("/email-change/current/send-otp", response_model=OtpSentResponse, summary="Send OTP To Current Email")
async def send_current_email_otp(user: CurrentUser, auth: AuthServiceDep) -> OtpSentResponse:
    minutes = await auth.send_current_email_otp(user)
    return OtpSentResponse(message="OTP sent to your current email", expires_in_minutes=minutes)


@router.post("/email-change/current/verify", response_model=OtpVerifiedResponse, summary="Verify Current Email OTP")
async def verify_current_email_otp(
    body: EmailChangeOtpRequest, user: CurrentUser, auth: AuthServiceDep
) -> OtpVerifiedResponse:
    await auth.verify_current_email_otp(user, body.otp)
    return OtpVerifiedResponse(message="Current email verified successfully", can_proceed=True)


@router.post(
    "/email-change/new/send-otp",
    response_model=NewEmailOtpResponse,
    summary="Send OTP To New Email",
    responses={409: {"description": "Email already in use"}},
)
async def send_new_email_otp(body: NewEmailRequest, user: CurrentUser, auth: AuthServiceDep) -> NewEmailOtpResponse:
    new_email = await auth.send_new_email_otp(user, body.new_email)
    return NewEmailOtpResponse(message="OTP sent to your new email", new_email=new_email)


@router.post("/email-change/new/verify", response_model=OtpVerifiedResponse, summary="Verify New Email OTP")
async def verify_new_email_otp(
    body: EmailChangeOtpRequest, user: CurrentUser, auth: AuthServiceDep
) -> OtpVerifiedResponse:
    await auth.verify_new_email_otp(user, body.otp)
    return OtpVerifiedResponse(message="New email verified successfully", can_proceed=True)


@router.post(
    "/email-change/confirm",
    response_model=EmailChangeConfirmedResponse,
    summary="Confirm Email Change",
    description="Apply the verified email change and new password. All sessions are revoked.",
)
async def confirm_email_change(
    body: ConfirmEmailChangeRequest,
    response: Response,
    user: CurrentUser,
    auth: AuthServiceDep,
) -> EmailChangeConfirmedResponse:
    user = await auth.confirm_email_change(user, body.new_email, body.new_password)
    clear_auth_cookies(response)
    return EmailChangeConfirmedResponse(
        message="Email changed successfully. Please log in again.",
        requires_reauth=True,
        user=UserRead.model_validate(user),
    )
