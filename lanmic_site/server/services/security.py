"""
Password hashing and token primitives.

Access tokens are short-lived HS256 JWTs carrying the user id as ``sub``.
Refresh tokens are opaque random strings persisted in the database so they
can be rotated and revoked.
"""

import re
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import settings

logger = get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.auth.bcrypt_rounds,
)

REFRESH_TOKEN_LENGTH = 64
OTP_LENGTH = 6

_EXPIRY_PATTERN = re.compile(r"^(\d+)([smhd])$")
_EXPIRY_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


class InvalidTokenError(Exception):
    """Raised when an access token cannot be decoded or has expired."""

    def __init__(self, message: str, expired: bool = False) -> None:
        super().__init__(message)
        self.expired = expired


class TokenData(BaseModel):
    sub: str
    type: str = "access"
    iat: int
    exp: int

    @property
    def user_id(self) -> int:
        return int(self.sub)


def parse_expiry(value: str, default: timedelta) -> timedelta:
    """Convert a duration such as ``15m`` or ``7d`` to a timedelta.

    Unparseable values fall back to ``default``.
    """
    match = _EXPIRY_PATTERN.match(value.strip()) if value else None
    if not match:
        logger.warning(f"Invalid expiry value {value!r}, using default of {default}")
        return default
    amount, unit = match.groups()
    return timedelta(**{_EXPIRY_UNITS[unit]: int(amount)})


def access_token_lifetime() -> timedelta:
    return parse_expiry(settings.auth.access_token_expiry, timedelta(minutes=15))


def refresh_token_lifetime(remember_me: bool = False) -> timedelta:
    if remember_me:
        return parse_expiry(settings.auth.remember_me_refresh_token_expiry, timedelta(days=30))
    return parse_expiry(settings.auth.refresh_token_expiry, timedelta(days=7))


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, lifetime: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + (lifetime or access_token_lifetime())).timestamp()),
    }
    return jwt.encode(payload, settings.auth.jwt_secret, algorithm=settings.auth.jwt_algorithm)


def decode_access_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.auth.jwt_secret, algorithms=[settings.auth.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired", expired=True) from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("Invalid token") from e

    try:
        data = TokenData(**payload)
    except ValidationError as e:
        raise InvalidTokenError("Invalid token") from e
    if data.type != "access" or not data.sub.isdigit():
        raise InvalidTokenError("Invalid token")
    return data


def generate_refresh_token() -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(REFRESH_TOKEN_LENGTH))


def generate_otp() -> str:
    """Six random decimal digits, leading zeros allowed."""
    return "".join(secrets.choice(string.digits) for _ in range(OTP_LENGTH))
