"""Unit tests for database models and enums."""

import pytest

from app.models.user import User, UserRole


class TestUserRoleEnum:
    """Tests for UserRole enum."""

    def test_all_roles_defined(self):
        assert UserRole.USER.value == "user"
        assert UserRole.ADMIN.value == "admin"

    def test_role_count(self):
        assert len(UserRole) == 2

    def test_string_coercion(self):
        assert UserRole.ADMIN == "admin"
        assert str(UserRole.USER) == "user"

    def test_from_string(self):
        assert UserRole("admin") is UserRole.ADMIN

    def test_invalid_role_raises(self):
        with pytest.raises(ValueError):
            UserRole("superuser")


class TestUserTable:
    """Tests for the users table definition."""

    def test_table_name(self):
        assert User.__tablename__ == "users"

    def test_unique_columns(self):
        columns = User.__table__.c
        assert columns.email.unique
        assert columns.username.unique
        assert not columns.name.unique

    def test_id_is_autoincrement_primary_key(self):
        id_col = User.__table__.c.id
        assert id_col.primary_key
        assert id_col.autoincrement is True

    def test_role_defaults_to_user(self):
        assert User.__table__.c.role.default.arg == UserRole.USER

    def test_repr_has_no_password_hash(self):
        user = User(id=1, username="a", email="a@example.com", password_hash="secret-hash")
        assert "secret-hash" not in repr(user)
