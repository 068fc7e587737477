"""Tests for POST /auth/login and POST /auth/logout."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_login_returns_agent_and_token(async_client: AsyncClient):
    r = await async_client.post("/auth/login", json={"username": "J28012026", "password": "Jadan@2026"})
    assert r.status_code == 200
    data = r.json()
    assert data["agent_id"] == "AGT-7742"
    assert data["agent_name"] == "Jabir"
    assert data["token"]


@pytest.mark.asyncio
async def test_wrong_password_is_401(async_client: AsyncClient):
    r = await async_client.post("/auth/login", json={"username": "J28012026", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials. Please contact your administrator."


@pytest.mark.asyncio
async def test_logout_ends_session(async_client: AsyncClient, auth_headers):
    r = await async_client.post("/auth/logout", headers=auth_headers)
    assert r.status_code == 204
    r = await async_client.get("/records/", headers=auth_headers)
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_logout_forgets_the_workspace(async_client: AsyncClient, app):
    for _ in range(5):
        r = await async_client.post(
            "/auth/login", json={"username": "J28012026", "password": "Jadan@2026"}
        )
        headers = {"X-Session-Token": r.json()["token"]}
        await async_client.get("/workspace/", headers=headers)
        await async_client.post("/auth/logout", headers=headers)
    assert len(app.state.workspaces) == 0
