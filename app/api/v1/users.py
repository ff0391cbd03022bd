"""User directory API endpoints.

Guards are attached per route via ``guarded(...)`` and run before the
service is touched. Domain errors are mapped to HTTP responses by the
exception handlers registered in ``app.main``.
"""

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth.dependencies import guarded
from app.auth.guards import authenticated, owner_or_self, role_in
from app.core.exceptions import NotFoundError
from app.models.user import UserRole
from app.providers import UserSvc
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import (
    EmailLookup,
    RoleUpdate,
    UserCreate,
    UserListResponse,
    UserProfileUpdate,
    UserPublic,
)

router = APIRouter()

_USER_ID = Path(ge=1, description="User id")

# Role read from storage: a demoted or deleted admin loses access at once
_admin_only = guarded(authenticated, role_in(UserRole.ADMIN), fresh_role=True)


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register_user(candidate: UserCreate, svc: UserSvc) -> UserPublic:
    """Register a new user. The role is always ``user``."""
    return await svc.register(candidate)


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest, svc: UserSvc) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    return await svc.login(credentials)


@router.post("/email", response_model=UserPublic)
async def find_user_by_email(body: EmailLookup, svc: UserSvc) -> UserPublic:
    """Look up a user by email address."""
    user = await svc.find_by_email(str(body.email))
    if user is None:
        raise NotFoundError(body.email, field="email")
    return user


@router.get("", response_model=UserListResponse)
async def list_users(
    svc: UserSvc,
    page: int = Query(1, description="1-based page number; values below 1 mean 1"),
    limit: int | None = Query(None, description="Page size, clamped to [1, 100]; defaults to 10"),
    username: str | None = Query(None, description="Case-sensitive username substring"),
) -> UserListResponse:
    """
    List users ordered by id.

    - **page** / **limit**: pagination (``limit`` is clamped, never rejected)
    - **username**: only users whose username contains this value
    """
    return await svc.list_users(page=page, limit=limit, username=username)


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(svc: UserSvc, user_id: int = _USER_ID) -> UserPublic:
    """Get a specific user by id."""
    return await svc.require_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserPublic,
    dependencies=[Depends(guarded(authenticated, owner_or_self))],
)
async def update_profile(
    patch: UserProfileUpdate,
    svc: UserSvc,
    user_id: int = _USER_ID,
) -> UserPublic:
    """Update your own profile. ``email``, ``password`` and ``role`` are ignored."""
    return await svc.update_profile(user_id, patch)


@router.put(
    "/{user_id}/role",
    response_model=UserPublic,
    dependencies=[Depends(_admin_only)],
)
async def update_role(
    body: RoleUpdate,
    svc: UserSvc,
    user_id: int = _USER_ID,
) -> UserPublic:
    """Change a user's role (admin only)."""
    return await svc.update_role(user_id, body.role)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(_admin_only)],
)
async def delete_user(svc: UserSvc, user_id: int = _USER_ID) -> None:
    """Delete a user (admin only)."""
    await svc.delete_user(user_id)
