"""Tests for POST /capture/photo."""

import base64

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_capture_returns_data_url(async_client: AsyncClient, auth_headers):
    frame = base64.b64encode(b"\xff\xd8\xff\xe0frame").decode()
    r = await async_client.post("/capture/photo", json={"frame_base64": frame}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["photo"] == f"data:image/jpeg;base64,{frame}"
    assert r.json()["error"] is None


@pytest.mark.asyncio
async def test_capture_failure_is_reported_not_raised(async_client: AsyncClient, auth_headers):
    r = await async_client.post("/capture/photo", json={"frame_base64": "%%%"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["photo"] is None
    assert r.json()["error"]
