"""Database repositories for data access."""
from app.repositories.protocols import UserRepositoryProtocol
from app.repositories.user_repository import UserRepository

__all__ = [
    "UserRepository",
    "UserRepositoryProtocol",
]
