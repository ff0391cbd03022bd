"""Access-control predicates evaluated before a directory operation runs.

Each guard is a plain ``OperationRequest -> bool`` function. Guards are
attached explicitly per operation and composed with :func:`enforce`, which
short-circuits on the first failure. Because ``enforce`` runs before the
service is called, a denied request never reaches the repository.

Usage::

    request = build_request(token, resource_id=user_id)
    caller = enforce(request, authenticated, role_in(UserRole.ADMIN))
"""

from collections.abc import Callable
from dataclasses import dataclass

from jose import JWTError

from app.auth.security import decode_token
from app.core.exceptions import Forbidden, NotAuthenticatedError
from app.models.user import UserRole
from app.schemas.auth import TokenUser


@dataclass(frozen=True)
class OperationRequest:
    """The caller identity and the resource an operation addresses."""

    identity: TokenUser | None
    resource_id: int | None = None


Guard = Callable[[OperationRequest], bool]


def identity_from_token(token: str | None) -> TokenUser | None:
    """Decode *token* into a ``TokenUser``; ``None`` if missing, invalid or expired."""
    if not token:
        return None
    try:
        payload = decode_token(token)
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None
    try:
        return TokenUser(
            id=int(payload["sub"]),
            username=payload.get("username", ""),
            role=payload.get("role", ""),
            email=payload.get("email", ""),
        )
    except (KeyError, TypeError, ValueError):
        # Missing sub, non-numeric sub or unknown role
        return None


def build_request(token: str | None, resource_id: int | None = None) -> OperationRequest:
    return OperationRequest(identity=identity_from_token(token), resource_id=resource_id)


def authenticated(request: OperationRequest) -> bool:
    """The request carries a valid, unexpired token."""
    return request.identity is not None


def owner_or_self(request: OperationRequest) -> bool:
    """The caller addresses their own record."""
    return (
        request.identity is not None
        and request.resource_id is not None
        and request.identity.id == request.resource_id
    )


def role_in(*allowed_roles: str | UserRole) -> Guard:
    """Guard factory: the caller's role is in *allowed_roles*."""
    allowed = frozenset(UserRole(r) for r in allowed_roles)

    def _has_role(request: OperationRequest) -> bool:
        return request.identity is not None and request.identity.role in allowed

    _has_role.__name__ = f"role_in({', '.join(sorted(allowed))})"
    return _has_role


def enforce(request: OperationRequest, *guards: Guard) -> TokenUser | None:
    """Evaluate *guards* in order; all must pass.

    Returns the caller identity on success.

    Raises:
        NotAuthenticatedError: A guard failed and the request has no identity.
        Forbidden: A guard failed for an authenticated caller.
    """
    for guard in guards:
        if not guard(request):
            if request.identity is None:
                raise NotAuthenticatedError()
            raise Forbidden()
    return request.identity
