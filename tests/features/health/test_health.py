"""Tests for the health endpoint and request plumbing."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_health_endpoint_returns_ok(async_client: AsyncClient) -> None:
    """The /health endpoint should return a successful payload."""

    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.headers.get("X-Request-ID")
    assert response.json() == {"status": "ok"}


async def test_request_id_header_is_echoed(async_client: AsyncClient) -> None:
    response = await async_client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unknown_route_uses_error_body(async_client: AsyncClient) -> None:
    response = await async_client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
