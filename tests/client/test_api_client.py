"""Resource methods of :class:`TaskboardClient` against a scripted transport."""

from __future__ import annotations

import json

import httpx
import pytest

from taskboard.client import ApiError, ClientSettings, MemoryTokenStore, Session, TaskboardClient

pytestmark = pytest.mark.asyncio

_AUTH_BODY = {
    "message": "Login successful",
    "user": {"id": "u1", "email": "ada@example.com", "name": "Ada"},
    "access_token": "access-1",
    "refresh_token": "refresh-1",
    "token_type": "bearer",
}


async def test_login_establishes_session(
    client_settings: ClientSettings, scripted, sleeper
) -> None:
    store = MemoryTokenStore()
    scripted.steps.append(httpx.Response(200, json=_AUTH_BODY))

    async with TaskboardClient(
        client_settings,
        session=Session(store),
        transport=scripted.transport,
        sleep=sleeper,
    ) as client:
        body = await client.login(email="ada@example.com", password="Sup3rSecret!")

    assert body["user"]["email"] == "ada@example.com"
    assert client.session.access_token == "access-1"
    assert store.load().refresh_token == "refresh-1"
    assert "Authorization" not in scripted.requests[0].headers


async def test_failed_login_leaves_session_untouched(
    client_settings: ClientSettings, scripted, sleeper
) -> None:
    scripted.steps.append(httpx.Response(401, json={"error": "Invalid email or password"}))

    async with TaskboardClient(
        client_settings, transport=scripted.transport, sleep=sleeper
    ) as client:
        with pytest.raises(ApiError, match="Invalid email or password"):
            await client.login(email="ada@example.com", password="wrong")

    assert client.session.is_authenticated is False
    assert scripted.paths() == ["/auth/login"]


async def test_logout_clears_session(
    client_settings: ClientSettings, scripted, sleeper, signed_in_session: Session
) -> None:
    async with TaskboardClient(
        client_settings,
        session=signed_in_session,
        transport=scripted.transport,
        sleep=sleeper,
    ) as client:
        client.logout()

    assert signed_in_session.is_authenticated is False
    assert scripted.requests == []


async def test_resource_paths_and_payloads(
    client_settings: ClientSettings, scripted, sleeper, signed_in_session: Session
) -> None:
    for _ in range(5):
        scripted.steps.append(httpx.Response(200, json={"ok": True}))

    async with TaskboardClient(
        client_settings,
        session=signed_in_session,
        transport=scripted.transport,
        sleep=sleeper,
    ) as client:
        await client.create_workspace("Team")
        await client.add_member("ws1", "bob@example.com", role="ADMIN")
        await client.list_tasks("ws1", "p1", status="TODO")
        await client.update_task("ws1", "p1", "t1", status="DONE")
        await client.delete_comment("ws1", "p1", "t1", "c1")

    methods = [(request.method, request.url.path) for request in scripted.requests]
    assert methods == [
        ("POST", "/workspaces"),
        ("POST", "/workspaces/ws1/members"),
        ("GET", "/workspaces/ws1/projects/p1/tasks"),
        ("PUT", "/workspaces/ws1/projects/p1/tasks/t1"),
        ("DELETE", "/workspaces/ws1/projects/p1/tasks/t1/comments/c1"),
    ]
    assert json.loads(scripted.requests[0].read()) == {"name": "Team"}
    assert json.loads(scripted.requests[1].read()) == {
        "email": "bob@example.com",
        "role": "ADMIN",
    }
    assert scripted.requests[2].url.params["status"] == "TODO"
    assert "priority" not in scripted.requests[2].url.params
    assert json.loads(scripted.requests[3].read()) == {"status": "DONE"}
