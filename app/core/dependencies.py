"""
FastAPI dependencies for the application.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.jwt import decode_access_token
from app.core.permissions import raise_if_not_roles
from app.db.session import get_db
from app.schemas.user import CurrentUser
from app.services.auth_service import AuthService
from app.services.order_service import OrderService

# Security scheme for JWT bearer tokens
security = HTTPBearer(auto_error=False)

__all__ = [
    "get_db",
    "get_current_user",
    "require_role",
    "get_order_service",
    "get_auth_service",
    "security",
]


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Get the current authenticated principal from the JWT token.

    Raises:
        401: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub") or not payload.get("role"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("user_id")
    return CurrentUser(
        username=payload["sub"],
        role=payload["role"],
        client_code=payload.get("client_code"),
        client_name=payload.get("client_name"),
        user_id=UUID(user_id) if user_id else None,
    )


def require_role(*allowed_roles: str):
    """
    Dependency factory to require specific roles.

    Usage:
        @router.post("/", dependencies=[Depends(require_role("admin"))])
        async def create_something(...):
            ...
    """
    async def check_role(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        raise_if_not_roles(user.role, list(allowed_roles))
        return user

    return check_role


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    """Order service bound to the request's session."""
    return OrderService(db)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Auth service bound to the request's session."""
    return AuthService(db)
