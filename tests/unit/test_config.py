"""Unit tests for Settings validation."""

import pytest
from pydantic import ValidationError

from app.config import Settings

_STRONG_SECRET = "x" * 40


class TestJWTSecretStrength:
    """Tests for environment-dependent secret checks."""

    def test_production_rejects_default_secret(self):
        with pytest.raises(ValidationError):
            Settings(environment="production", jwt_secret_key="CHANGE-ME-IN-PRODUCTION")

    def test_staging_rejects_short_secret(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging", jwt_secret_key="short")

    def test_production_accepts_strong_secret(self):
        settings = Settings(environment="production", jwt_secret_key=_STRONG_SECRET)
        assert settings.is_production

    def test_development_warns_on_short_secret(self):
        with pytest.warns(UserWarning):
            Settings(environment="development", jwt_secret_key="short")


class TestDatabaseUrl:
    def test_plain_postgres_url_gets_asyncpg(self):
        settings = Settings(
            jwt_secret_key=_STRONG_SECRET, database_url="postgresql://u:p@db:5432/users"
        )
        assert settings.database_url.startswith("postgresql+asyncpg://")


class TestUserSettings:
    def test_page_size_defaults(self):
        settings = Settings(jwt_secret_key=_STRONG_SECRET)
        assert settings.users_default_page_size == 10
        assert settings.users_max_page_size == 100

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_bcrypt_rounds_bounds(self, rounds):
        with pytest.raises(ValidationError):
            Settings(jwt_secret_key=_STRONG_SECRET, bcrypt_rounds=rounds)

    @pytest.mark.parametrize("field", ["users_default_page_size", "users_max_page_size"])
    @pytest.mark.parametrize("size", [0, 101])
    def test_page_sizes_stay_within_hard_cap(self, field, size):
        with pytest.raises(ValidationError):
            Settings(jwt_secret_key=_STRONG_SECRET, **{field: size})
