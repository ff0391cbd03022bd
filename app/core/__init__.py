"""Core business logic."""
from app.core.exceptions import (
    ConflictError,
    Forbidden,
    InvalidCredentialsError,
    NotAuthenticatedError,
    NotFoundError,
    StorageError,
    UserDirectoryError,
    ValidationError,
)
from app.core.pagination import PageRequest, build_links, build_meta

__all__ = [
    "UserDirectoryError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InvalidCredentialsError",
    "Forbidden",
    "NotAuthenticatedError",
    "StorageError",
    "PageRequest",
    "build_links",
    "build_meta",
]
