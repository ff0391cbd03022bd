"""FastAPI adapter for the access-control guards."""

from dataclasses import replace
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from app.auth.guards import Guard, OperationRequest, authenticated, build_request, enforce
from app.providers import UserRepo
from app.repositories.protocols import UserRepositoryProtocol
from app.schemas.auth import TokenUser

# auto_error=False: a missing token becomes an anonymous request and the
# guards decide, so unguarded routes still accept anonymous callers.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)

BearerToken = Annotated[str | None, Depends(oauth2_scheme)]


def _resource_id(request: Request) -> int | None:
    raw = request.path_params.get("user_id")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


async def with_stored_identity(
    op: OperationRequest, repo: UserRepositoryProtocol
) -> OperationRequest:
    """Replace the token's claims with the caller's stored row.

    A caller whose account no longer exists becomes anonymous.
    """
    if op.identity is None:
        return op
    record = await repo.get_by_id(op.identity.id)
    if record is None:
        return replace(op, identity=None)
    return replace(
        op,
        identity=op.identity.model_copy(
            update={"role": record.role, "username": record.username, "email": record.email}
        ),
    )


def guarded(*guards: Guard, fresh_role: bool = False):
    """Dependency factory that runs *guards* against the current request.

    With ``fresh_role`` the caller's role is read from the repository
    rather than trusted from the token, so a demotion or deletion takes
    effect before the token expires.

    Usage:
        @router.put("/{user_id}", dependencies=[Depends(guarded(authenticated, owner_or_self))])
    """
    if not fresh_role:

        async def _check(request: Request, token: BearerToken) -> TokenUser | None:
            op = build_request(token, resource_id=_resource_id(request))
            return enforce(op, *guards)

        return _check

    async def _check_stored(
        request: Request, token: BearerToken, repo: UserRepo
    ) -> TokenUser | None:
        op = build_request(token, resource_id=_resource_id(request))
        return enforce(await with_stored_identity(op, repo), *guards)

    return _check_stored


async def get_current_user(request: Request, token: BearerToken) -> TokenUser:
    """Return the authenticated caller or deny the request."""
    op = build_request(token, resource_id=_resource_id(request))
    return enforce(op, authenticated)  # type: ignore[return-value]  # authenticated implies identity


# Convenience type alias
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
