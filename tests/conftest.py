"""Pytest configuration and fixtures for API tests."""
import os

# Set test env BEFORE any imports that use config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["INITIAL_ADMIN_NAME"] = "Kalle"
os.environ["INITIAL_ADMIN_NICKNAME"] = "Birdie-Kalle"
os.environ["SEASON_COMPLETION_BASIS"] = "standing"

import pytest
from httpx import ASGITransport, AsyncClient

from league.models.base import async_session_factory, drop_db
from web.api.main import app, setup_database


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
async def _init_db():
    """Fresh schema and initial admin before each test (ASGI lifespan doesn't run with httpx)."""
    await drop_db()
    await setup_database()


@pytest.fixture
async def session():
    async with async_session_factory() as s:
        yield s


@pytest.fixture
async def client():
    """Async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


async def login_as(client, name: str) -> dict:
    """Log in as the named active player and return Authorization headers."""
    r = await client.get("/api/auth/players")
    assert r.status_code == 200
    player_id = next(p["id"] for p in r.json() if p["name"] == name)
    r = await client.post("/api/auth/login", json={"player_id": player_id})
    assert r.status_code == 200, f"Login failed: {r.text}"
    token = r.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client):
    """Login as the initial admin and return Authorization headers for protected endpoints."""
    return await login_as(client, "Kalle")


@pytest.fixture
async def league(client, auth_headers):
    """Three more players (Lisa, Olle, Mona) added by the admin; returns name -> headers."""
    headers = {"Kalle": auth_headers}
    for name, nickname in [("Lisa", "Eagle-Lisa"), ("Olle", "Bunker-Olle"), ("Mona", "Putt-Mona")]:
        r = await client.post(
            "/api/admin/players",
            json={"name": name, "nickname": nickname},
            headers=auth_headers,
        )
        assert r.status_code == 200, r.text
        headers[name] = await login_as(client, name)
    return headers
