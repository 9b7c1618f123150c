"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.order import (
    CarpetOrderCreate,
    CarpetOrderUpdate,
    OrderRead,
    OrderSummary,
    StageRead,
    StageVocabularyRead,
    TimelineEntryRead,
)
from app.schemas.user import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    PortalUserCreate,
    PortalUserRead,
)

__all__ = [
    "CarpetOrderCreate",
    "CarpetOrderUpdate",
    "OrderRead",
    "OrderSummary",
    "StageRead",
    "StageVocabularyRead",
    "TimelineEntryRead",
    "CurrentUser",
    "LoginRequest",
    "LoginResponse",
    "PortalUserCreate",
    "PortalUserRead",
]
