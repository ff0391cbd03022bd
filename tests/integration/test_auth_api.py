"""Integration tests for token introspection on /api/v1/auth/me.

Tokens are stateless: a valid signature and an unexpired ``exp`` are all
the service checks. No database lookup happens on this route.
"""

from datetime import timedelta

import pytest

from tests.helpers.token_factory import auth_headers, create_access_token, encode_claims

pytestmark = pytest.mark.asyncio

ME = "/api/v1/auth/me"


class TestMeEndpoint:
    """Tests for the /me endpoint."""

    async def test_get_me_admin(self, client):
        resp = await client.get(ME, headers=auth_headers(1, role="admin", username="root"))
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 1
        assert body["username"] == "root"
        assert body["role"] == "admin"

    async def test_get_me_user(self, client):
        resp = await client.get(ME, headers=auth_headers(7, role="user"))
        assert resp.status_code == 200
        assert resp.json()["role"] == "user"

    async def test_get_me_from_login_token(self, client):
        payload = {
            "name": "Dana",
            "username": "dana",
            "email": "dana@example.com",
            "password": "s3cret-pass",
        }
        created = (await client.post("/api/v1/users", json=payload)).json()
        login = await client.post(
            "/api/v1/users/login",
            json={"email": payload["email"], "password": payload["password"]},
        )
        token = login.json()["access_token"]

        resp = await client.get(ME, headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == 200
        assert resp.json() == {
            "id": created["id"],
            "username": "dana",
            "role": "user",
            "email": "dana@example.com",
        }

    async def test_get_me_without_token(self, client):
        resp = await client.get(ME)
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"

    async def test_get_me_with_invalid_token(self, client):
        resp = await client.get(ME, headers={"Authorization": "Bearer invalid.jwt.token"})
        assert resp.status_code == 401


class TestTokenValidation:
    """Malformed or untrusted tokens never authenticate."""

    async def test_expired_token(self, client):
        token = create_access_token(1, expires_delta=timedelta(seconds=-10))
        resp = await client.get(ME, headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_wrong_secret(self, client):
        token = encode_claims(
            {"sub": "1", "role": "admin", "username": "x", "type": "access"},
            secret="some-other-secret-that-is-long-enough",
        )
        resp = await client.get(ME, headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_non_access_token_type(self, client):
        token = encode_claims({"sub": "1", "role": "user", "username": "x", "type": "refresh"})
        resp = await client.get(ME, headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_unknown_role_claim(self, client):
        token = encode_claims({"sub": "1", "role": "superuser", "username": "x", "type": "access"})
        resp = await client.get(ME, headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_non_numeric_subject(self, client):
        token = encode_claims({"sub": "user-001", "role": "user", "username": "x", "type": "access"})
        resp = await client.get(ME, headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_basic_scheme_ignored(self, client):
        resp = await client.get(ME, headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert resp.status_code == 401
