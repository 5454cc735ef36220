"""Shared pytest fixtures for Taskboard tests."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskboard import Settings, reload_settings
from taskboard.db.migrations import run_migrations
from taskboard.main import create_app

TEST_PASSWORD = "Sup3rSecret!"
TEST_JWT_SECRET = "test-secret-key-with-at-least-32-characters"

_ENV_OVERRIDES = {
    "TASKBOARD_JWT_SECRET": TEST_JWT_SECRET,
    "TASKBOARD_TEST_FAST_HASH": "1",
    "TASKBOARD_DATABASE_AUTO_CREATE": "false",
}


@pytest.fixture(scope="session")
def _database_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a file-backed SQLite database URL for the test session."""

    db_path = tmp_path_factory.mktemp("taskboard-db") / "taskboard.sqlite"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture(scope="session")
def settings(_database_url: str) -> Iterator[Settings]:
    """Apply Alembic migrations against the ephemeral test database."""

    previous = {key: os.environ.get(key) for key in (*_ENV_OVERRIDES, "TASKBOARD_DATABASE_DSN")}
    os.environ.update(_ENV_OVERRIDES)
    os.environ["TASKBOARD_DATABASE_DSN"] = _database_url
    resolved = reload_settings()
    assert resolved.database_dsn == _database_url

    run_migrations(resolved)

    yield resolved

    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    reload_settings()


@pytest.fixture(scope="session")
def app(settings: Settings) -> FastAPI:
    """Return an application instance for integration-style tests."""

    return create_app(settings)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an HTTPX async client bound to the FastAPI app."""

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


RegisterUser = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture()
def register_user(async_client: AsyncClient) -> RegisterUser:
    """Register a fresh account and return its tokens plus auth headers."""

    async def _register(name: str = "Test User", email: str | None = None) -> dict[str, Any]:
        address = email or f"user-{uuid4().hex[:10]}@example.com"
        response = await async_client.post(
            "/auth/register",
            json={"email": address, "password": TEST_PASSWORD, "name": name},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "id": body["user"]["id"],
            "email": address,
            "password": TEST_PASSWORD,
            "access_token": body["access_token"],
            "refresh_token": body["refresh_token"],
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
        }

    return _register


@pytest_asyncio.fixture()
async def workspace_team(async_client: AsyncClient, register_user: RegisterUser) -> dict[str, Any]:
    """A workspace with an owner, an admin, a member and an outsider."""

    owner = await register_user("Olivia Owner")
    admin = await register_user("Adam Admin")
    member = await register_user("Mia Member")
    outsider = await register_user("Oscar Outsider")

    response = await async_client.post(
        "/workspaces",
        headers=owner["headers"],
        json={"name": f"Team {uuid4().hex[:6]}"},
    )
    assert response.status_code == 201, response.text
    workspace_id = response.json()["workspace"]["id"]

    for user, role in ((admin, "ADMIN"), (member, "MEMBER")):
        added = await async_client.post(
            f"/workspaces/{workspace_id}/members",
            headers=owner["headers"],
            json={"email": user["email"], "role": role},
        )
        assert added.status_code == 201, added.text

    return {
        "workspace_id": workspace_id,
        "owner": owner,
        "admin": admin,
        "member": member,
        "outsider": outsider,
    }


@pytest_asyncio.fixture()
async def project(async_client: AsyncClient, workspace_team: dict[str, Any]) -> dict[str, Any]:
    """A project created by the workspace owner inside ``workspace_team``."""

    workspace_id = workspace_team["workspace_id"]
    response = await async_client.post(
        f"/workspaces/{workspace_id}/projects",
        headers=workspace_team["owner"]["headers"],
        json={"name": "Launch", "description": "Q3 launch plan"},
    )
    assert response.status_code == 201, response.text
    project_body = response.json()["project"]
    return {
        **workspace_team,
        "project_id": project_body["id"],
        "base": f"/workspaces/{workspace_id}/projects/{project_body['id']}",
    }
