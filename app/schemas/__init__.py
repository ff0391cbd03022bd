"""Pydantic schemas package."""
from app.schemas.auth import LoginRequest, TokenResponse, TokenUser
from app.schemas.user import (
    EmailLookup,
    NewUser,
    PageLinks,
    PageMeta,
    RoleUpdate,
    UserCreate,
    UserListResponse,
    UserProfileUpdate,
    UserPublic,
    UserRecord,
)

__all__ = [
    # Auth schemas
    "LoginRequest",
    "TokenResponse",
    "TokenUser",
    # User records
    "UserRecord",
    "NewUser",
    "UserPublic",
    # User requests
    "UserCreate",
    "UserProfileUpdate",
    "RoleUpdate",
    "EmailLookup",
    # Pagination
    "PageMeta",
    "PageLinks",
    "UserListResponse",
]
