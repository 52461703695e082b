"""
API Dependencies.

Annotated dependency aliases shared by the routers: the database session,
the authenticated user (with and without the verified-email requirement),
and the service singletons.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lanmic_site.core.database import get_session, get_session_factory
from lanmic_site.core.database.entities.users import User
from lanmic_site.core.database.repositories import UserRepository
from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.constant import ACCESS_TOKEN_COOKIE

from .auth_service import AuthService
from .email_service import EmailService, get_email_service
from .relay import EventRelay, get_event_relay
from .security import InvalidTokenError, decode_access_token
from .upload_service import UploadService, get_upload_service

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]
SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
RelayDep = Annotated[EventRelay, Depends(get_event_relay)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_access_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Bearer header first, then the ``access_token`` cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_current_user(
    request: Request,
    session: SessionDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> User:
    token = extract_access_token(request, credentials)
    if not token:
        raise _unauthorized("Unauthorized")
    try:
        data = decode_access_token(token)
    except InvalidTokenError as e:
        raise _unauthorized(str(e)) from e

    user = await UserRepository(session).get_by_id(data.user_id)
    if not user:
        raise _unauthorized("User not found")
    return user


async def get_verified_user(user: Annotated[User, Depends(get_current_user)]) -> User:
    if not user.is_verified:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Email verification required")
    return user


async def get_optional_user(
    request: Request,
    session_factory: SessionFactoryDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    token: Annotated[Optional[str], Query(description="Access token for clients that cannot set headers")] = None,
) -> Optional[User]:
    """Resolve the user when a valid token is presented, otherwise None.

    Used by streaming endpoints, so the lookup runs in its own short-lived
    session rather than one held until the response finishes.
    """
    raw = extract_access_token(request, credentials) or token
    if not raw:
        return None
    try:
        data = decode_access_token(raw)
    except InvalidTokenError:
        logger.debug("Ignoring invalid token on optional-auth endpoint")
        return None
    async with session_factory() as session:
        return await UserRepository(session).get_by_id(data.user_id)


def get_auth_service(session: SessionDep, email_service: EmailServiceDep) -> AuthService:
    return AuthService(session, email_service)


CurrentUser = Annotated[User, Depends(get_current_user)]
VerifiedUser = Annotated[User, Depends(get_verified_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
