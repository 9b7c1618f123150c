"""
User and authentication Pydantic schemas.
"""

from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.permissions import Roles


class PortalUserCreate(BaseModel):
    """Schema for creating a portal login."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    role: str = Roles.CLIENT
    client_code: Optional[str] = None
    client_name: Optional[str] = None

    @field_validator("username")
    @classmethod
    def _clean_username(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("username must not be blank")
        return value

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        if value not in Roles.ALL:
            raise ValueError(f"role must be one of: {', '.join(Roles.ALL)}")
        return value


class PortalUserRead(BaseModel):
    """Schema for reading portal user data (API response)."""

    id: UUID
    username: str
    role: str
    client_code: Optional[str] = None
    client_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CurrentUser(BaseModel):
    """The authenticated caller, as carried in the access token."""

    username: str
    role: str
    client_code: Optional[str] = None
    client_name: Optional[str] = None
    user_id: Optional[UUID] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN


class LoginRequest(BaseModel):
    """Schema for login request."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Schema for login response."""

    access_token: str
    token_type: str = "bearer"
    user: CurrentUser
