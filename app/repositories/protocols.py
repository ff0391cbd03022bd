"""Protocol definitions for repository interfaces.

These protocols enable type-safe mocking in tests and decouple service
layer code from concrete SQLAlchemy implementations.

Every method returns immutable value records (``UserRecord``), never ORM
instances, and every write names the fields it touches.
"""

from typing import Any, Protocol

from app.schemas.user import NewUser, UserRecord


class UserRepositoryProtocol(Protocol):
    """Interface for user data access.

    Implementations raise ``NotFoundError`` when a write addresses a missing
    id, ``ConflictError`` on a uniqueness violation and ``StorageError`` when
    the backing store fails.
    """

    async def get_by_id(self, user_id: int) -> UserRecord | None: ...

    async def get_by_email(self, email: str) -> UserRecord | None: ...

    async def get_page(self, skip: int, take: int) -> tuple[list[UserRecord], int]: ...

    async def find_by_substring(
        self, field: str, pattern: str, skip: int, take: int
    ) -> tuple[list[UserRecord], int]: ...

    async def insert(self, user: NewUser) -> UserRecord: ...

    async def update_fields(self, user_id: int, fields: dict[str, Any]) -> UserRecord: ...

    async def delete(self, user_id: int) -> None: ...

    async def count(self) -> int: ...
