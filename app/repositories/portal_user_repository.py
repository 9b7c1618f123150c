"""
Portal user repository - database operations for PortalUser.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.portal_user import PortalUser
from app.schemas.user import PortalUserCreate
from app.core.security import hash_password


class PortalUserRepository:
    """Repository for PortalUser database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> Optional[PortalUser]:
        """Get a user by ID."""
        result = await self.db.execute(
            select(PortalUser).where(PortalUser.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[PortalUser]:
        """Get a user by username (case-insensitive)."""
        if not username or not username.strip():
            return None
        result = await self.db.execute(
            select(PortalUser).where(
                func.lower(PortalUser.username) == username.strip().lower()
            )
        )
        return result.scalar_one_or_none()

    async def create(self, data: PortalUserCreate) -> PortalUser:
        """Create a new user."""
        user = PortalUser(
            username=data.username,
            hashed_password=hash_password(data.password),
            role=data.role,
            client_code=data.client_code,
            client_name=data.client_name,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def list(self, skip: int = 0, limit: int = 50) -> list[PortalUser]:
        """List users ordered by username."""
        result = await self.db.execute(
            select(PortalUser)
            .order_by(PortalUser.username.asc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
