"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from app.models.carpet_order import CarpetOrder
from app.models.portal_user import PortalUser

__all__ = [
    "CarpetOrder",
    "PortalUser",
]
