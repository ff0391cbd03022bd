"""Repository for user data access."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, StorageError, ValidationError
from app.models.user import User
from app.schemas.user import NewUser, UserRecord

# Columns that may be written after insert
_UPDATABLE_FIELDS = frozenset({"name", "username", "email", "password_hash", "role"})

# Columns that support substring search
_SEARCHABLE_FIELDS = frozenset({"name", "username", "email"})


@contextmanager
def _storage_errors() -> Iterator[None]:
    """Translate driver-level failures into ``StorageError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"User storage failure: {exc.__class__.__name__}") from exc


class UserRepository:
    """Data access layer for users."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        """Get a user by ID."""
        with _storage_errors():
            result = await self.session.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Get a user by email address (exact match)."""
        with _storage_errors():
            result = await self.session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    async def get_page(self, skip: int, take: int) -> tuple[list[UserRecord], int]:
        """Get one page of users ordered by id, plus the unfiltered total."""
        query = select(User).order_by(User.id).offset(skip).limit(take)
        with _storage_errors():
            total = await self.count()
            result = await self.session.execute(query)
            users = result.scalars().all()
        return [UserRecord.model_validate(u) for u in users], total

    async def find_by_substring(
        self, field: str, pattern: str, skip: int, take: int
    ) -> tuple[list[UserRecord], int]:
        """Case-sensitive substring search on *field*.

        ``%`` and ``_`` in *pattern* match literally. The returned total
        counts the filtered set, not the whole table.
        """
        if field not in _SEARCHABLE_FIELDS:
            raise ValidationError(f"Cannot search users by '{field}'")

        condition = getattr(User, field).contains(pattern, autoescape=True)
        query = select(User).where(condition).order_by(User.id).offset(skip).limit(take)
        count_query = select(func.count()).select_from(User).where(condition)

        with _storage_errors():
            total = await self.session.scalar(count_query) or 0
            result = await self.session.execute(query)
            users = result.scalars().all()
        return [UserRecord.model_validate(u) for u in users], total

    async def insert(self, user: NewUser) -> UserRecord:
        """Insert a new user.

        Raises:
            ConflictError: If the email or username is already taken.
        """
        row = User(
            name=user.name,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role,
        )
        self.session.add(row)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("A user with this email or username already exists") from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StorageError("Failed to insert user") from exc

        with _storage_errors():
            await self.session.refresh(row)
        return UserRecord.model_validate(row)

    async def update_fields(self, user_id: int, fields: dict[str, Any]) -> UserRecord:
        """Write exactly *fields* on the user and return the refreshed record.

        Raises:
            NotFoundError: If no user has *user_id*.
            ConflictError: If the write violates a uniqueness constraint.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

        if not fields:
            existing = await self.get_by_id(user_id)
            if existing is None:
                raise NotFoundError(user_id)
            return existing

        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**fields)
            .returning(User)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            user = result.scalar_one_or_none()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("A user with this email or username already exists") from exc
        except SQLAlchemyError as exc:
            raise StorageError("Failed to update user") from exc

        if user is None:
            raise NotFoundError(user_id)
        return UserRecord.model_validate(user)

    async def delete(self, user_id: int) -> None:
        """Hard delete a user.

        Raises:
            NotFoundError: If no user has *user_id*.
        """
        with _storage_errors():
            result = await self.session.execute(delete(User).where(User.id == user_id))
        if not result.rowcount:
            raise NotFoundError(user_id)

    async def count(self) -> int:
        """Total number of users."""
        with _storage_errors():
            return await self.session.scalar(select(func.count()).select_from(User)) or 0
