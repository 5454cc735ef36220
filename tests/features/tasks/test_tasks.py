"""Integration tests for tasks inside a project."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create_task(
    client: AsyncClient, project: dict[str, Any], role: str = "member", **fields: Any
) -> dict[str, Any]:
    payload = {"title": "Write docs", **fields}
    response = await client.post(
        f"{project['base']}/tasks", headers=project[role]["headers"], json=payload
    )
    assert response.status_code == 201, response.text
    return response.json()["task"]


async def test_member_creates_task_with_defaults(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    response = await async_client.post(
        f"{project['base']}/tasks",
        headers=project["member"]["headers"],
        json={"title": "  Test Task  "},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Task created successfully"
    task = body["task"]
    assert task["title"] == "Test Task"
    assert task["status"] == "TODO"
    assert task["priority"] == "MEDIUM"
    assert task["assignee_id"] is None
    assert task["created_by"] == project["member"]["id"]


@pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}])
async def test_task_title_is_required(
    async_client: AsyncClient, project: dict[str, Any], payload: dict[str, Any]
) -> None:
    response = await async_client.post(
        f"{project['base']}/tasks", headers=project["member"]["headers"], json=payload
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Task title is required"}


async def test_outsider_cannot_create_tasks(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    response = await async_client.post(
        f"{project['base']}/tasks",
        headers=project["outsider"]["headers"],
        json={"title": "Sneaky"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": "You do not have permission to create tasks in this workspace"
    }


async def test_assignee_must_be_a_member(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    rejected = await async_client.post(
        f"{project['base']}/tasks",
        headers=project["owner"]["headers"],
        json={"title": "Delegate", "assignee_id": project["outsider"]["id"]},
    )
    assert rejected.json() == {"error": "Assignee must be a member of this workspace"}

    task = await _create_task(
        async_client, project, role="owner", assignee_id=project["member"]["id"]
    )
    assert task["assignee_id"] == project["member"]["id"]


async def test_list_tasks_with_filters(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    await _create_task(async_client, project, title="Task 1", priority="HIGH")
    await _create_task(async_client, project, title="Task 2", status="DONE", priority="LOW")
    url = f"{project['base']}/tasks"
    headers = project["member"]["headers"]

    everything = await async_client.get(url, headers=headers)
    high = await async_client.get(url, headers=headers, params={"priority": "HIGH"})
    done = await async_client.get(url, headers=headers, params={"status": "DONE"})
    bad = await async_client.get(url, headers=headers, params={"status": "LATER"})

    assert [task["title"] for task in everything.json()["tasks"]] == ["Task 1", "Task 2"]
    assert [task["title"] for task in high.json()["tasks"]] == ["Task 1"]
    assert [task["title"] for task in done.json()["tasks"]] == ["Task 2"]
    assert bad.status_code == 400


async def test_listing_tasks_of_unknown_project(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    url = f"/workspaces/{project['workspace_id']}/projects/{uuid4()}/tasks"

    member = await async_client.get(url, headers=project["member"]["headers"])
    outsider = await async_client.get(url, headers=project["outsider"]["headers"])

    assert member.json() == {"error": "Project not found in this workspace"}
    assert "access" in outsider.json()["error"]


async def test_update_task(async_client: AsyncClient, project: dict[str, Any]) -> None:
    task = await _create_task(async_client, project, title="Original Title")
    url = f"{project['base']}/tasks/{task['id']}"

    response = await async_client.put(
        url,
        headers=project["admin"]["headers"],
        json={"title": "Updated Task", "status": "DONE", "due_date": "2030-01-31T12:00:00Z"},
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "Task updated successfully"
    assert body["task"]["title"] == "Updated Task"
    assert body["task"]["status"] == "DONE"
    assert body["task"]["priority"] == "MEDIUM"
    assert body["task"]["due_date"].startswith("2030-01-31T12:00:00")

    fetched = await async_client.get(url, headers=project["member"]["headers"])
    assert fetched.json()["task"]["status"] == "DONE"


async def test_update_task_rejects_blank_title(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    task = await _create_task(async_client, project)

    response = await async_client.put(
        f"{project['base']}/tasks/{task['id']}",
        headers=project["member"]["headers"],
        json={"title": "   "},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Task title cannot be empty"}


async def test_missing_task_is_not_found(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    response = await async_client.put(
        f"{project['base']}/tasks/{uuid4()}",
        headers=project["member"]["headers"],
        json={"title": "Test"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Task not found in this project"}


async def test_delete_task_permissions(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    task = await _create_task(async_client, project, role="admin")
    url = f"{project['base']}/tasks/{task['id']}"

    by_member = await async_client.delete(url, headers=project["member"]["headers"])
    assert by_member.status_code == 400
    assert by_member.json() == {"error": "You do not have permission to delete this task"}

    by_owner = await async_client.delete(url, headers=project["owner"]["headers"])
    assert by_owner.status_code == 200
    assert by_owner.json() == {"message": "Task deleted successfully"}

    again = await async_client.delete(url, headers=project["owner"]["headers"])
    assert again.json() == {"error": "Task not found in this project"}


async def test_creator_can_delete_own_task(
    async_client: AsyncClient, project: dict[str, Any]
) -> None:
    task = await _create_task(async_client, project)

    response = await async_client.delete(
        f"{project['base']}/tasks/{task['id']}", headers=project["member"]["headers"]
    )

    assert response.status_code == 200
