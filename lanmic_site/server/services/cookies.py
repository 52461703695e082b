"""Auth cookie helpers mirroring the tokens returned in response bodies."""

from datetime import timedelta

from fastapi import Response

from lanmic_site.server.core.config import settings
from lanmic_site.server.core.constant import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE

from .security import access_token_lifetime, refresh_token_lifetime


def _set_cookie(response: Response, name: str, value: str, lifetime: timedelta) -> None:
    response.set_cookie(
        key=name,
        value=value,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


def set_auth_cookies(response: Response, access_token: str, refresh_token: str, remember_me: bool = False) -> None:
    _set_cookie(response, ACCESS_TOKEN_COOKIE, access_token, access_token_lifetime())
    _set_cookie(response, REFRESH_TOKEN_COOKIE, refresh_token, refresh_token_lifetime(remember_me))


def clear_auth_cookies(response: Response) -> None:
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key=name,
            path="/",
            httponly=True,
            secure=settings.is_production,
            samesite="strict",
        )
