# apps/api/backoffice/core/security.py
# Password hashing + JWT issue/decode.
# pbkdf2_sha256 is the default scheme; bcrypt_sha256 / bcrypt stay in the list so
# hashes imported from older accounts still verify.

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from backoffice.core.config import settings

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256", "bcrypt_sha256", "bcrypt"],
    deprecated="auto",
)

# Upper bound for absurdly long inputs.
MAX_PASSWORD_LEN = 4096


def get_password_hash(password: str) -> str:
    if not isinstance(password, str):
        password = str(password or "")
    if len(password) > MAX_PASSWORD_LEN:
        password = password[:MAX_PASSWORD_LEN]
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Returns False on unknown hash formats instead of raising, so the caller
    can answer with a plain credentials error.
    """
    try:
        return pwd_context.verify(plain_password or "", hashed_password or "")
    except (ValueError, TypeError):
        return False


def create_access_token(sub: int | str, role: str, station: Optional[int] = None,
                        expires_minutes: Optional[int] = None) -> str:
    """
    Token payload: sub (user id), role, station (None for station-less roles).
    """
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "station": station,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def decode_access_token(token: str) -> dict[str, Any]:
    # JWTError (expired signature included) propagates to deps.get_current_user
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])


__all__ = [
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
