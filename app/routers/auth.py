"""
Authentication router for login and portal user management.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.dependencies import get_auth_service, get_current_user, require_role
from app.core.permissions import Roles
from app.schemas.user import CurrentUser, LoginRequest, LoginResponse, PortalUserCreate, PortalUserRead
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate a portal user or client and return a JWT access token.
    """
    result = await service.login(credentials)

    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return result


@router.get("/me", response_model=CurrentUser)
async def get_current_user_info(
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Get information about the currently authenticated user.
    """
    return current_user


@router.post("/users", response_model=PortalUserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: PortalUserCreate,
    service: AuthService = Depends(get_auth_service),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
):
    """
    Create a new portal login.

    Only admin users can create new users.
    """
    return await service.create_user(user_data)


@router.get("/users", response_model=list[PortalUserRead])
async def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: AuthService = Depends(get_auth_service),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
):
    """
    List portal users.

    Only admin users can list all users.
    """
    return await service.list_users(skip=skip, limit=limit)
