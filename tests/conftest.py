"""Shared test fixtures for the user directory service."""

import os

# Set test settings before any app imports trigger Settings() validation.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-for-unit-tests-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.auth.security import CredentialService  # noqa: E402
from app.main import app  # noqa: E402
from app.providers import get_user_repository  # noqa: E402
from app.services.user_service import UserService  # noqa: E402
from tests.helpers.fake_repository import InMemoryUserRepository  # noqa: E402

# ---------------------------------------------------------------------------
# Mock DB session (readiness probe only; user data lives in the fake repo)
# ---------------------------------------------------------------------------


def _make_mock_session():
    """Create a mock async DB session whose ``execute`` succeeds."""
    session = AsyncMock()
    result_mock = MagicMock()
    result_mock.scalar.return_value = 1
    session.execute.return_value = result_mock
    session.close = AsyncMock()
    return session


def _make_mock_session_factory():
    """Return a callable that mimics ``async_sessionmaker().__call__()``."""
    mock_session = _make_mock_session()
    factory = MagicMock()
    ctx = AsyncMock()
    ctx.__aenter__.return_value = mock_session
    factory.return_value = ctx
    return factory, mock_session


# ---------------------------------------------------------------------------
# Repository / service fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def credentials() -> CredentialService:
    return CredentialService()


@pytest.fixture()
def user_service(user_repo, credentials) -> UserService:
    return UserService(user_repo, credentials)


# ---------------------------------------------------------------------------
# HTTP client fixture (FastAPI app with in-memory repository)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def client(user_repo) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app.

    The repository is swapped for ``InMemoryUserRepository`` so tests run
    without a database.
    """
    session_factory, _ = _make_mock_session_factory()
    app.state.engine = MagicMock()
    app.state.session_factory = session_factory
    app.dependency_overrides[get_user_repository] = lambda: user_repo

    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_user_repository, None)

