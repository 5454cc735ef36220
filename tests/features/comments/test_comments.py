"""Integration tests for task comments."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture()
async def task_url(async_client: AsyncClient, project: dict[str, Any]) -> str:
    response = await async_client.post(
        f"{project['base']}/tasks",
        headers=project["owner"]["headers"],
        json={"title": "Discuss"},
    )
    assert response.status_code == 201
    return f"{project['base']}/tasks/{response.json()['task']['id']}"


async def _comment(
    client: AsyncClient, task_url: str, headers: dict[str, str], content: str = "Looks good"
) -> dict[str, Any]:
    response = await client.post(f"{task_url}/comments", headers=headers, json={"content": content})
    assert response.status_code == 201, response.text
    return response.json()["comment"]


async def test_member_comments_and_lists(
    async_client: AsyncClient, project: dict[str, Any], task_url: str
) -> None:
    member = project["member"]

    comment = await _comment(async_client, task_url, member["headers"], "  First!  ")
    listed = await async_client.get(f"{task_url}/comments", headers=project["owner"]["headers"])

    assert comment["content"] == "First!"
    assert comment["author"]["id"] == member["id"]
    assert comment["author"]["name"] == "Mia Member"
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()["comments"]] == [comment["id"]]
    assert listed.json()["comments"][0]["author"]["email"] == member["email"]


async def test_comment_content_is_required(
    async_client: AsyncClient, project: dict[str, Any], task_url: str
) -> None:
    response = await async_client.post(
        f"{task_url}/comments", headers=project["member"]["headers"], json={"content": " "}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Comment content is required"}


async def test_outsider_cannot_comment(
    async_client: AsyncClient, project: dict[str, Any], task_url: str
) -> None:
    response = await async_client.post(
        f"{task_url}/comments", headers=project["outsider"]["headers"], json={"content": "Hi"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "You do not have permission to comment in this workspace"}


async def test_only_author_updates_comment(
    async_client: AsyncClient, project: dict[str, Any], task_url: str
) -> None:
    comment = await _comment(async_client, task_url, project["member"]["headers"])
    url = f"{task_url}/comments/{comment['id']}"

    by_owner = await async_client.put(
        url, headers=project["owner"]["headers"], json={"content": "Edited by owner"}
    )
    assert by_owner.json() == {"error": "You can only edit your own comments"}

    by_author = await async_client.put(
        url, headers=project["member"]["headers"], json={"content": "Edited"}
    )
    assert by_author.status_code == 200
    assert by_author.json()["message"] == "Comment updated successfully"
    assert by_author.json()["comment"]["content"] == "Edited"

    blank = await async_client.put(url, headers=project["member"]["headers"], json={"content": ""})
    assert blank.json() == {"error": "Comment content cannot be empty"}


async def test_delete_comment_by_author_or_manager(
    async_client: AsyncClient, project: dict[str, Any], task_url: str
) -> None:
    first = await _comment(async_client, task_url, project["admin"]["headers"])
    second = await _comment(async_client, task_url, project["member"]["headers"])

    by_member = await async_client.delete(
        f"{task_url}/comments/{first['id']}", headers=project["member"]["headers"]
    )
    assert by_member.json() == {"error": "You do not have permission to delete this comment"}

    by_admin = await async_client.delete(
        f"{task_url}/comments/{second['id']}", headers=project["admin"]["headers"]
    )
    by_author = await async_client.delete(
        f"{task_url}/comments/{first['id']}", headers=project["admin"]["headers"]
    )
    assert by_admin.json() == {"message": "Comment deleted successfully"}
    assert by_author.status_code == 200

    listed = await async_client.get(f"{task_url}/comments", headers=project["owner"]["headers"])
    assert listed.json() == {"comments": []}


async def test_unknown_comment_is_not_found(
    async_client: AsyncClient, project: dict[str, Any], task_url: str
) -> None:
    response = await async_client.delete(
        f"{task_url}/comments/{uuid4()}", headers=project["owner"]["headers"]
    )

    assert response.json() == {"error": "Comment not found on this task"}
