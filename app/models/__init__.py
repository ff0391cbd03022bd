"""Database models package."""

from app.models.base import Base, TimestampMixin
from app.models.user import User, UserRole

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Models
    "User",
    # Enums
    "UserRole",
]
