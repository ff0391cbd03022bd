"""FastAPI dependency providers for repositories and services.

Separated from ``dependencies.py`` so route modules can import type
aliases from here without pulling in engine setup.
"""

from typing import Annotated

from fastapi import Depends

from app.auth.security import CredentialService
from app.dependencies import DBSession
from app.repositories.user_repository import UserRepository
from app.services.user_service import UserService

# ---------------------------------------------------------------------------
# Repository providers
# ---------------------------------------------------------------------------


def get_user_repository(db: DBSession) -> UserRepository:
    return UserRepository(db)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]

# ---------------------------------------------------------------------------
# Service providers
# ---------------------------------------------------------------------------


def get_credential_service() -> CredentialService:
    return CredentialService()


Credentials = Annotated[CredentialService, Depends(get_credential_service)]


def get_user_service(repo: UserRepo, credentials: Credentials) -> UserService:
    return UserService(repo, credentials)


UserSvc = Annotated[UserService, Depends(get_user_service)]
