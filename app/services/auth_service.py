"""
Authentication service: logins, access tokens and portal users.
"""

import hmac
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.jwt import create_access_token
from app.core.permissions import Roles
from app.core.security import verify_password
from app.errors import user_exists
from app.models.portal_user import PortalUser
from app.repositories.carpet_order_repository import CarpetOrderRepository
from app.repositories.portal_user_repository import PortalUserRepository
from app.schemas.user import CurrentUser, LoginRequest, LoginResponse, PortalUserCreate

logger = logging.getLogger(__name__)


class AuthService:
    """Service for login and portal user management."""

    def __init__(
        self,
        db: Optional[AsyncSession],
        users: Optional[PortalUserRepository] = None,
        orders: Optional[CarpetOrderRepository] = None,
    ):
        self.users = users if users is not None else PortalUserRepository(db)
        self.orders = orders if orders is not None else CarpetOrderRepository(db)

    async def login(self, credentials: LoginRequest) -> Optional[LoginResponse]:
        """
        Authenticate a user and issue an access token.

        Registered portal users are checked first. Otherwise, when
        CLIENT_SHARED_PASSWORD is configured, a username equal to a buyer
        code present in CarpetOrder logs in as that client.

        Returns None when the credentials are not accepted.
        """
        username = credentials.username.strip()
        if not username or not credentials.password:
            return None

        user = await self.users.get_by_username(username)
        if user is not None:
            principal = self._portal_principal(user, credentials.password)
        else:
            principal = await self._buyer_code_principal(username, credentials.password)

        if principal is None:
            logger.info("Rejected login for %r", username)
            return None

        logger.info("Login for %s (%s)", principal.username, principal.role)
        return LoginResponse(access_token=self.issue_token(principal), user=principal)

    @staticmethod
    def issue_token(principal: CurrentUser) -> str:
        payload = {
            "sub": principal.username,
            "role": principal.role,
            "client_code": principal.client_code,
            "client_name": principal.client_name,
        }
        if principal.user_id is not None:
            payload["user_id"] = str(principal.user_id)
        return create_access_token(payload)

    @staticmethod
    def _portal_principal(user: PortalUser, password: str) -> Optional[CurrentUser]:
        if not user.is_active or not verify_password(password, user.hashed_password):
            return None

        client_code = user.client_code
        client_name = user.client_name
        if user.role == Roles.ADMIN:
            client_code = client_code or settings.ADMIN_CLIENT_CODE
            client_name = client_name or "System Administrator"

        return CurrentUser(
            username=user.username,
            role=user.role,
            client_code=client_code,
            client_name=client_name or f"{client_code} Client",
            user_id=user.id,
        )

    async def _buyer_code_principal(self, username: str, password: str) -> Optional[CurrentUser]:
        shared = settings.CLIENT_SHARED_PASSWORD
        if not shared or not hmac.compare_digest(password.encode("utf-8"), shared.encode("utf-8")):
            return None

        wanted = username.lower()
        for code in await self.orders.list_buyer_codes():
            if code.strip().lower() == wanted:
                return CurrentUser(
                    username=code.strip(),
                    role=Roles.CLIENT,
                    client_code=code.strip(),
                    client_name=f"{code.strip()} Client",
                )
        return None

    async def create_user(self, data: PortalUserCreate) -> PortalUser:
        """Register a login; usernames are unique regardless of case."""
        if await self.users.get_by_username(data.username):
            raise user_exists(data.username)
        user = await self.users.create(data)
        logger.info("Created portal user %s (%s)", user.username, user.role)
        return user

    async def list_users(self, skip: int = 0, limit: int = 50) -> List[PortalUser]:
        return await self.users.list(skip=skip, limit=min(limit, 200))
