"""
JWT access tokens for portal users.

Tokens carry the principal (username, role, client code) so requests can be
authorised without a database round-trip.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from app.core.config import settings
from app.utils.time import utc_now


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign `data` with an expiry (defaults to ACCESS_TOKEN_EXPIRE_HOURS)."""
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    issued_at = utc_now()
    to_encode["iat"] = issued_at
    to_encode["exp"] = issued_at + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the token payload, or None if it is invalid or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
