"""Fixtures for API unit tests: a seeded app with zero delays, AsyncClient, logged-in headers."""

import pytest
from httpx import ASGITransport, AsyncClient

from record_portal.config.settings import AppSettings
from record_portal.main import create_app


@pytest.fixture
def settings():
    return AppSettings(
        environment="test",
        seed_record_count=20,
        random_seed=7,
        login_delay_seconds=0,
        sync_delay_seconds=0,
        sync_success_rate=1.0,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def async_client(app):
    """Async HTTP client for testing against a fresh in-memory app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def auth_headers(async_client):
    """Headers carrying the session token of the configured agent."""
    r = await async_client.post(
        "/auth/login", json={"username": "J28012026", "password": "Jadan@2026"}
    )
    assert r.status_code == 200
    return {"X-Session-Token": r.json()["token"]}
