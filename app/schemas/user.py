"""Pydantic schemas for user records.

``UserRecord`` and ``NewUser`` are the immutable values exchanged with the
repository. ``UserPublic`` is the only shape handed to callers; it has no
password material.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import UserRole

# bcrypt ignores input past this many bytes, so longer passwords are refused
MAX_PASSWORD_BYTES = 72


def password_too_long(plain: str) -> bool:
    return len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES


# Fields a profile update may never touch
PROTECTED_FIELDS = frozenset({"id", "email", "password", "password_hash", "role"})

# Fields a profile update is allowed to write
PROFILE_FIELDS = frozenset({"name", "username"})


class UserRecord(BaseModel):
    """Full stored user row, including the password hash."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    username: str
    email: str
    password_hash: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_public(self) -> "UserPublic":
        return UserPublic.model_validate(self)


class NewUser(BaseModel):
    """Insert payload; the repository assigns the id."""

    model_config = ConfigDict(frozen=True)

    name: str
    username: str
    email: str
    password_hash: str
    role: UserRole = UserRole.USER


class UserPublic(BaseModel):
    """Public user information."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    username: str
    email: str
    role: UserRole


class UserCreate(BaseModel):
    """Registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if password_too_long(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
        return v


class UserProfileUpdate(BaseModel):
    """Profile update request.

    Unknown keys (``email``, ``password``, ``role`` ...) are dropped on
    parse; the service strips them again for callers that pass a raw dict.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, min_length=1, max_length=255)
    username: str | None = Field(None, min_length=1, max_length=50)


class RoleUpdate(BaseModel):
    """Role update request."""

    role: UserRole


class EmailLookup(BaseModel):
    """Lookup-by-email request body."""

    email: EmailStr


class PageMeta(BaseModel):
    """Navigation metadata for a page of results."""

    current_page: int
    item_count: int
    items_per_page: int
    total_items: int
    total_pages: int


class PageLinks(BaseModel):
    """Links to neighbouring pages; empty string when there is none."""

    first: str
    previous: str
    next: str
    last: str


class UserListResponse(BaseModel):
    """Schema for paginated user list."""

    items: list[UserPublic]
    meta: PageMeta
    links: PageLinks
