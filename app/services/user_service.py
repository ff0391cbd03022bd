"""Service layer for the user directory.

Registration, lookup, listing, profile/role updates, deletion and login.
Authorization is not checked here: callers run the access-control guards
first (see ``app.auth.guards``). Repository errors are passed through
unchanged.
"""

from collections.abc import Mapping
from typing import Any

from app.auth.security import CredentialService
from app.config import get_settings
from app.core.exceptions import InvalidCredentialsError, NotFoundError, ValidationError
from app.core.pagination import PageRequest, build_links, build_meta
from app.models.user import UserRole
from app.repositories.protocols import UserRepositoryProtocol
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import (
    MAX_PASSWORD_BYTES,
    PROFILE_FIELDS,
    PROTECTED_FIELDS,
    NewUser,
    UserCreate,
    UserListResponse,
    UserProfileUpdate,
    UserPublic,
    password_too_long,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    """Version-agnostic business logic for users."""

    def __init__(
        self,
        repo: UserRepositoryProtocol,
        credentials: CredentialService | None = None,
    ):
        self._repo = repo
        self._credentials = credentials or CredentialService()

    async def register(self, candidate: UserCreate) -> UserPublic:
        """Create a new user with role ``user``.

        Raises:
            ValidationError: If a required field is blank or the password is too long.
            ConflictError: If the email or username is already taken.
        """
        missing = [
            field
            for field in ("name", "username", "email", "password")
            if not str(getattr(candidate, field, "") or "").strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if password_too_long(candidate.password):
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")

        password_hash = await self._credentials.hash(candidate.password)
        record = await self._repo.insert(
            NewUser(
                name=candidate.name,
                username=candidate.username,
                email=str(candidate.email),
                password_hash=password_hash,
                role=UserRole.USER,
            )
        )
        logger.info("user_registered", user_id=record.id, username=record.username)
        return record.to_public()

    async def get_user(self, user_id: int) -> UserPublic | None:
        record = await self._repo.get_by_id(user_id)
        return record.to_public() if record else None

    async def find_by_email(self, email: str) -> UserPublic | None:
        record = await self._repo.get_by_email(email)
        return record.to_public() if record else None

    async def list_users(
        self,
        page: int = 1,
        limit: int | None = None,
        username: str | None = None,
        route: str | None = None,
    ) -> UserListResponse:
        """List users ordered by id.

        *limit* defaults to ``users_default_page_size`` and is clamped to
        ``[1, users_max_page_size]``; *page* is clamped to ``>= 1``. With
        *username* set, only users whose username contains it (case-sensitive)
        are returned and the totals describe that subset.
        """
        settings = get_settings()
        if limit is None:
            limit = settings.users_default_page_size
        request = PageRequest.from_query(page, limit, max_limit=settings.users_max_page_size)

        if username is None:
            records, total = await self._repo.get_page(request.offset, request.limit)
        else:
            records, total = await self._repo.find_by_substring(
                "username", username, request.offset, request.limit
            )

        meta = build_meta(request, len(records), total)
        return UserListResponse(
            items=[r.to_public() for r in records],
            meta=meta,
            links=build_links(route or settings.users_base_route, request, meta.total_pages),
        )

    async def update_profile(
        self, user_id: int, patch: UserProfileUpdate | Mapping[str, Any]
    ) -> UserPublic:
        """Apply identity changes. ``email``, ``password`` and ``role`` are never written.

        Raises:
            NotFoundError: If no user has *user_id*.
        """
        if isinstance(patch, UserProfileUpdate):
            raw = patch.model_dump(exclude_unset=True)
        else:
            raw = dict(patch)

        dropped = sorted(set(raw) & PROTECTED_FIELDS)
        if dropped:
            logger.warning("profile_update_fields_ignored", user_id=user_id, fields=dropped)

        fields = {k: v for k, v in raw.items() if k in PROFILE_FIELDS and v is not None}
        record = await self._repo.update_fields(user_id, fields)
        logger.info("user_profile_updated", user_id=user_id, fields=sorted(fields))
        return record.to_public()

    async def update_role(self, user_id: int, role: UserRole | str) -> UserPublic:
        """Set the user's role. The admin gate is the caller's job.

        Raises:
            ValidationError: If *role* is not a known role.
            NotFoundError: If no user has *user_id*.
        """
        try:
            new_role = UserRole(role)
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {role}") from exc

        record = await self._repo.update_fields(user_id, {"role": new_role})
        logger.info("user_role_updated", user_id=user_id, role=new_role.value)
        return record.to_public()

    async def delete_user(self, user_id: int) -> None:
        """Delete a user. Deleting a missing id raises ``NotFoundError``."""
        await self._repo.delete(user_id)
        logger.info("user_deleted", user_id=user_id)

    async def login(self, credentials: LoginRequest) -> TokenResponse:
        """Exchange email and password for an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
        """
        record = await self._repo.get_by_email(str(credentials.email))
        if record is None:
            await self._credentials.verify_dummy(credentials.password)
            logger.info("login_failed")
            raise InvalidCredentialsError()

        if not await self._credentials.verify(credentials.password, record.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        token = await self._credentials.issue_token(record.to_public())
        logger.info("login_succeeded", user_id=record.id)
        return TokenResponse(
            access_token=token,
            expires_in=self._credentials.token_lifetime_seconds,
        )

    async def require_user(self, user_id: int) -> UserPublic:
        """Like :meth:`get_user` but raises ``NotFoundError`` when absent."""
        user = await self.get_user(user_id)
        if user is None:
            raise NotFoundError(user_id)
        return user
