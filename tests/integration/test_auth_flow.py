"""Integration tests for the auth flow (requires running PostgreSQL).

Run: pytest tests/integration/test_auth_flow.py -v
Pre-condition: database migrated (alembic upgrade head)
"""

import pytest
from httpx import AsyncClient

pytestmark = [pytest.mark.integration, pytest.mark.asyncio(loop_scope="session")]


class TestLogin:
    async def test_login_success(
        self, client: AsyncClient, admin_credentials: dict[str, str]
    ) -> None:
        resp = await client.post("/api/auth/login", json=admin_credentials)
        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["user"]["email"] == admin_credentials["email"]
        assert body["data"]["expires_in"] == 900
        assert ":" in body["data"]["refresh_token"]
        assert "password_hash" not in body["data"]["user"]

    async def test_wrong_password(
        self, client: AsyncClient, admin_credentials: dict[str, str]
    ) -> None:
        resp = await client.post(
            "/api/auth/login",
            json={"email": admin_credentials["email"], "password": "Nope12345"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1003

    async def test_unknown_email_same_error(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "Nope12345"}
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == 1003


class TestRefresh:
    async def test_refresh_rotates_and_old_token_dies(
        self, client: AsyncClient, admin_credentials: dict[str, str]
    ) -> None:
        login = await client.post("/api/auth/login", json=admin_credentials)
        old = login.json()["data"]["refresh_token"]

        first = await client.post("/api/auth/refresh", json={"refresh_token": old})
        assert first.status_code == 200
        assert first.json()["data"]["refresh_token"] != old

        replay = await client.post("/api/auth/refresh", json={"refresh_token": old})
        assert replay.status_code == 401
        assert replay.json()["code"] == 1005

    async def test_malformed_refresh_token(self, client: AsyncClient) -> None:
        resp = await client.post("/api/auth/refresh", json={"refresh_token": "garbage"})
        assert resp.status_code == 401


class TestMe:
    async def test_me(self, auth_client: AsyncClient, admin_credentials: dict[str, str]) -> None:
        resp = await auth_client.get("/api/auth/me")
        assert resp.status_code == 200
        assert resp.json()["data"]["role"] == "ADMIN"
