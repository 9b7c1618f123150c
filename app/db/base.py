"""
SQLAlchemy declarative base.

All portal tables inherit from this Base class so Alembic sees them
through a single metadata object.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass
