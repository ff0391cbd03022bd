"""Password hashing and JWT utilities.

Passwords are hashed with bcrypt at a fixed work factor
(``Settings.bcrypt_rounds``). Each call draws a fresh salt, so hashing the
same password twice yields different strings that both verify.

Tokens are HS256 JWTs signed with the process-wide ``jwt_secret_key``. They
are stateless: there is no deny-list, so a token stays valid until ``exp``.

``CredentialService`` wraps the synchronous helpers in ``asyncio.to_thread``
so bcrypt's deliberate slowness never stalls the event loop.
"""

import asyncio
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
from jose import jwt

from app.config import get_settings
from app.schemas.user import MAX_PASSWORD_BYTES, UserPublic, password_too_long


def hash_password(plain: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of *plain*.

    Raises:
        ValueError: If *plain* is longer than ``MAX_PASSWORD_BYTES`` in UTF-8.
    """
    if password_too_long(plain):
        raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if *plain* produced *hashed*.

    Malformed hashes and passwords too long to have been hashed return False.
    """
    if not hashed or password_too_long(plain):
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=4)
def dummy_hash(rounds: int | None = None) -> str:
    """A throwaway hash to verify against when the account does not exist.

    Running bcrypt on that path keeps an unknown email as slow as a wrong
    password.
    """
    return hash_password("user-directory-timing-dummy", rounds)


def create_access_token(user: UserPublic) -> str:
    """Create a short-lived JWT access token for *user*."""
    settings = get_settings()
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "email": user.email,
        "role": user.role.value,
        "type": "access",
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token. Raises JWTError on failure."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


class CredentialService:
    """Async façade over hashing and token issuance."""

    def __init__(self, rounds: int | None = None):
        self._rounds = rounds

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self._rounds)

    async def verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(verify_password, password, hashed)

    async def verify_dummy(self, password: str) -> None:
        hashed = await asyncio.to_thread(dummy_hash, self._rounds)
        await asyncio.to_thread(verify_password, password, hashed)

    async def issue_token(self, user: UserPublic) -> str:
        return await asyncio.to_thread(create_access_token, user)

    @property
    def token_lifetime_seconds(self) -> int:
        return get_settings().jwt_access_token_expire_minutes * 60
