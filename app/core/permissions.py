"""
Role-based permission helpers for the portal.

Two roles exist: administrators manage every order, clients read the
orders carrying their own client code.
"""

from typing import List, Optional
from fastapi import HTTPException, status


class Roles:
    """Standard roles in the portal."""
    ADMIN = "admin"
    CLIENT = "client"

    # All roles list for validation
    ALL = [ADMIN, CLIENT]


def check_role_permission(user_role: str, allowed_roles: List[str]) -> bool:
    """Check if user's role is in the list of allowed roles."""
    if not user_role or not allowed_roles:
        return False
    return user_role in allowed_roles


def check_is_admin(user_role: str) -> bool:
    """Check if user is admin."""
    return user_role == Roles.ADMIN


def can_view_order(user_role: str, user_client_code: Optional[str], order_client_code: Optional[str]) -> bool:
    """
    Admins see every order; clients only orders with their client code.

    Client codes compare case-insensitively.
    """
    if check_is_admin(user_role):
        return True
    if not user_client_code or not order_client_code:
        return False
    return user_client_code.strip().lower() == order_client_code.strip().lower()


def raise_if_not_roles(user_role: str, allowed_roles: List[str], action: str = "perform this action") -> None:
    """
    Raise 403 error if user doesn't have one of the allowed roles.

    Raises:
        HTTPException: 403 if user doesn't have permission
    """
    if not check_role_permission(user_role, allowed_roles):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions to {action}. Required: {', '.join(allowed_roles)}"
        )
