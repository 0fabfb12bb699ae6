"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session. Tests are skipped when PostgreSQL is unreachable.
"""

import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from src.cp_common.database import async_session_factory, engine
from src.cp_gateway.auth.password import hash_password
from src.cp_gateway.user.db_models import UserModel
from src.main import app

ADMIN_PASSWORD = "TestPass123!"


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def database() -> None:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        pytest.skip(f"PostgreSQL not reachable: {exc}")


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client(database: None) -> AsyncGenerator[AsyncClient, None]:
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def admin_credentials(database: None) -> dict[str, str]:
    """Seed a fresh ADMIN user directly in the database."""
    email = f"admin_{uuid.uuid4().hex[:8]}@example.com"
    async with async_session_factory() as db:
        db.add(
            UserModel(
                email=email,
                password_hash=hash_password(ADMIN_PASSWORD),
                first_name="Integration",
                last_name="Admin",
                role="ADMIN",
                is_active=True,
            )
        )
        await db.commit()
    return {"email": email, "password": ADMIN_PASSWORD}


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def auth_client(
    client: AsyncClient, admin_credentials: dict[str, str]
) -> AsyncClient:
    """Authenticated client — logs the seeded admin in and injects the Bearer token."""
    login_resp = await client.post("/api/auth/login", json=admin_credentials)
    token = login_resp.json()["data"]["access_token"]
    client.headers.update({"Authorization": f"Bearer {token}"})
    return client
