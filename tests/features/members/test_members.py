"""Integration tests for workspace membership management."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from taskboard.db import SessionDep
from taskboard.features.members.dependencies import get_members_service
from taskboard.features.members.service import MembersService

pytestmark = pytest.mark.asyncio


def _members_url(team: dict[str, Any], user_id: str | None = None) -> str:
    base = f"/workspaces/{team['workspace_id']}/members"
    return f"{base}/{user_id}" if user_id else base


async def test_members_listing_shows_roles(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.get(
        _members_url(workspace_team), headers=workspace_team["member"]["headers"]
    )

    assert response.status_code == 200
    roles = {item["user_id"]: item["role"] for item in response.json()["members"]}
    assert roles == {
        workspace_team["owner"]["id"]: "OWNER",
        workspace_team["admin"]["id"]: "ADMIN",
        workspace_team["member"]["id"]: "MEMBER",
    }


async def test_outsider_cannot_list_members(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.get(
        _members_url(workspace_team), headers=workspace_team["outsider"]["headers"]
    )

    assert response.status_code == 400
    assert "access" in response.json()["error"]


async def test_admin_adds_member_but_not_admin(
    async_client: AsyncClient, workspace_team: dict[str, Any], register_user
) -> None:
    admin_headers = workspace_team["admin"]["headers"]
    newcomer = await register_user("Nina")

    promoted = await async_client.post(
        _members_url(workspace_team),
        headers=admin_headers,
        json={"email": newcomer["email"], "role": "ADMIN"},
    )
    assert promoted.status_code == 400
    assert promoted.json() == {"error": "Only the workspace owner can grant the ADMIN role"}

    added = await async_client.post(
        _members_url(workspace_team),
        headers=admin_headers,
        json={"email": newcomer["email"]},
    )
    assert added.status_code == 201
    body = added.json()
    assert body["message"] == "Member added successfully"
    assert body["member"]["role"] == "MEMBER"
    assert body["member"]["name"] == "Nina"


async def test_member_cannot_invite(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.post(
        _members_url(workspace_team),
        headers=workspace_team["member"]["headers"],
        json={"email": workspace_team["outsider"]["email"]},
    )

    assert response.status_code == 400
    assert "permission" in response.json()["error"]


async def test_owner_role_is_never_granted(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.post(
        _members_url(workspace_team),
        headers=workspace_team["owner"]["headers"],
        json={"email": workspace_team["outsider"]["email"], "role": "OWNER"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "The OWNER role cannot be granted"}


async def test_adding_unknown_or_existing_users_fails(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    owner_headers = workspace_team["owner"]["headers"]

    unknown = await async_client.post(
        _members_url(workspace_team),
        headers=owner_headers,
        json={"email": "nobody@example.com"},
    )
    duplicate = await async_client.post(
        _members_url(workspace_team),
        headers=owner_headers,
        json={"email": workspace_team["member"]["email"]},
    )

    assert unknown.json() == {"error": "User not found"}
    assert duplicate.json() == {"error": "User is already a member of this workspace"}


@pytest.mark.parametrize("email", ["x@y@z", "not an email@x", "a@b"])
async def test_adding_member_with_malformed_email_is_a_400(
    async_client: AsyncClient, workspace_team: dict[str, Any], email: str
) -> None:
    response = await async_client.post(
        _members_url(workspace_team),
        headers=workspace_team["owner"]["headers"],
        json={"email": email},
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("email: ")


async def test_members_routes_resolve_service_through_dependency(
    app: FastAPI, async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    sessions: list[object] = []

    def _recording_service(session: SessionDep) -> MembersService:
        sessions.append(session)
        return MembersService(session=session)

    app.dependency_overrides[get_members_service] = _recording_service
    try:
        response = await async_client.get(
            _members_url(workspace_team), headers=workspace_team["owner"]["headers"]
        )
    finally:
        app.dependency_overrides.pop(get_members_service, None)

    assert response.status_code == 200
    assert len(response.json()["members"]) == 3
    assert len(sessions) == 1


async def test_owner_promotes_member_and_admin_cannot_demote_admin(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    member_id = workspace_team["member"]["id"]

    promoted = await async_client.put(
        _members_url(workspace_team, member_id),
        headers=workspace_team["owner"]["headers"],
        json={"role": "ADMIN"},
    )
    assert promoted.status_code == 200
    assert promoted.json()["member"]["role"] == "ADMIN"

    demoted = await async_client.put(
        _members_url(workspace_team, member_id),
        headers=workspace_team["admin"]["headers"],
        json={"role": "MEMBER"},
    )
    assert demoted.status_code == 400
    assert demoted.json() == {"error": "Only the workspace owner can change an admin's role"}


async def test_owner_role_cannot_be_changed(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.put(
        _members_url(workspace_team, workspace_team["owner"]["id"]),
        headers=workspace_team["owner"]["headers"],
        json={"role": "MEMBER"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "The workspace owner's role cannot be changed"}


async def test_invalid_role_value_is_a_400(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.put(
        _members_url(workspace_team, workspace_team["member"]["id"]),
        headers=workspace_team["owner"]["headers"],
        json={"role": "SUPREME"},
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("role:")


async def test_remove_member_rules(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    admin_headers = workspace_team["admin"]["headers"]

    owner_removal = await async_client.delete(
        _members_url(workspace_team, workspace_team["owner"]["id"]), headers=admin_headers
    )
    assert owner_removal.json() == {"error": "The workspace owner cannot be removed"}

    by_member = await async_client.delete(
        _members_url(workspace_team, workspace_team["admin"]["id"]),
        headers=workspace_team["member"]["headers"],
    )
    assert by_member.json() == {"error": "You do not have permission to remove this member"}

    removed = await async_client.delete(
        _members_url(workspace_team, workspace_team["member"]["id"]), headers=admin_headers
    )
    assert removed.status_code == 200
    assert removed.json() == {"message": "Member removed successfully"}

    gone = await async_client.get(
        f"/workspaces/{workspace_team['workspace_id']}",
        headers=workspace_team["member"]["headers"],
    )
    assert gone.status_code == 400


async def test_member_can_leave(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    member = workspace_team["member"]

    response = await async_client.delete(
        _members_url(workspace_team, member["id"]), headers=member["headers"]
    )

    assert response.status_code == 200
    listed = await async_client.get("/workspaces", headers=member["headers"])
    assert listed.json() == {"workspaces": []}


async def test_removing_a_non_member_is_not_found(
    async_client: AsyncClient, workspace_team: dict[str, Any]
) -> None:
    response = await async_client.delete(
        _members_url(workspace_team, workspace_team["outsider"]["id"]),
        headers=workspace_team["owner"]["headers"],
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Member not found in this workspace"}
