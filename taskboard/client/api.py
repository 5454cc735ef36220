"""Resource-oriented wrapper over :class:`HttpClient`."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from .http import HttpClient, SessionExpiredHook, SleepFunc
from .session import Session
from .settings import ClientSettings

JSON = dict[str, Any]


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


class TaskboardClient:
    """Async client for the Taskboard REST API.

    Each method returns the decoded JSON body of a successful response and
    raises :class:`~taskboard.client.errors.ApiError` otherwise.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc = asyncio.sleep,
        on_session_expired: SessionExpiredHook | None = None,
    ) -> None:
        self.http = HttpClient(
            settings,
            session=session,
            transport=transport,
            sleep=sleep,
            on_session_expired=on_session_expired,
        )

    @property
    def session(self) -> Session:
        return self.http.session

    async def __aenter__(self) -> TaskboardClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _json(self, method: str, url: str, **kwargs: Any) -> JSON:
        response = await self.http.request(method, url, **kwargs)
        return response.json()

    # Auth

    async def register(self, *, email: str, password: str, name: str) -> JSON:
        body = await self._json(
            "POST",
            "/auth/register",
            json={"email": email, "password": password, "name": name},
            authenticated=False,
        )
        self.session.establish(body["access_token"], body.get("refresh_token"))
        return body

    async def login(self, *, email: str, password: str) -> JSON:
        body = await self._json(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
            authenticated=False,
        )
        self.session.establish(body["access_token"], body.get("refresh_token"))
        return body

    def logout(self) -> None:
        self.session.clear()

    async def me(self) -> JSON:
        return await self._json("GET", "/auth/me")

    # Workspaces

    async def list_workspaces(self) -> JSON:
        return await self._json("GET", "/workspaces")

    async def get_workspace(self, workspace_id: str) -> JSON:
        return await self._json("GET", f"/workspaces/{workspace_id}")

    async def create_workspace(self, name: str, description: str | None = None) -> JSON:
        return await self._json(
            "POST", "/workspaces", json=_drop_none({"name": name, "description": description})
        )

    async def update_workspace(self, workspace_id: str, **changes: Any) -> JSON:
        return await self._json("PUT", f"/workspaces/{workspace_id}", json=changes)

    async def delete_workspace(self, workspace_id: str) -> JSON:
        return await self._json("DELETE", f"/workspaces/{workspace_id}")

    # Members

    async def list_members(self, workspace_id: str) -> JSON:
        return await self._json("GET", f"/workspaces/{workspace_id}/members")

    async def add_member(self, workspace_id: str, email: str, role: str = "MEMBER") -> JSON:
        return await self._json(
            "POST",
            f"/workspaces/{workspace_id}/members",
            json={"email": email, "role": role},
        )

    async def update_member_role(self, workspace_id: str, user_id: str, role: str) -> JSON:
        return await self._json(
            "PUT", f"/workspaces/{workspace_id}/members/{user_id}", json={"role": role}
        )

    async def remove_member(self, workspace_id: str, user_id: str) -> JSON:
        return await self._json("DELETE", f"/workspaces/{workspace_id}/members/{user_id}")

    # Projects

    def _projects(self, workspace_id: str) -> str:
        return f"/workspaces/{workspace_id}/projects"

    async def list_projects(self, workspace_id: str) -> JSON:
        return await self._json("GET", self._projects(workspace_id))

    async def get_project(self, workspace_id: str, project_id: str) -> JSON:
        return await self._json("GET", f"{self._projects(workspace_id)}/{project_id}")

    async def create_project(
        self, workspace_id: str, name: str, description: str | None = None
    ) -> JSON:
        return await self._json(
            "POST",
            self._projects(workspace_id),
            json=_drop_none({"name": name, "description": description}),
        )

    async def update_project(self, workspace_id: str, project_id: str, **changes: Any) -> JSON:
        return await self._json(
            "PUT", f"{self._projects(workspace_id)}/{project_id}", json=changes
        )

    async def delete_project(self, workspace_id: str, project_id: str) -> JSON:
        return await self._json("DELETE", f"{self._projects(workspace_id)}/{project_id}")

    # Tasks

    def _tasks(self, workspace_id: str, project_id: str) -> str:
        return f"{self._projects(workspace_id)}/{project_id}/tasks"

    async def list_tasks(
        self,
        workspace_id: str,
        project_id: str,
        *,
        status: str | None = None,
        priority: str | None = None,
    ) -> JSON:
        return await self._json(
            "GET",
            self._tasks(workspace_id, project_id),
            params=_drop_none({"status": status, "priority": priority}),
        )

    async def get_task(self, workspace_id: str, project_id: str, task_id: str) -> JSON:
        return await self._json("GET", f"{self._tasks(workspace_id, project_id)}/{task_id}")

    async def create_task(self, workspace_id: str, project_id: str, **fields: Any) -> JSON:
        return await self._json("POST", self._tasks(workspace_id, project_id), json=fields)

    async def update_task(
        self, workspace_id: str, project_id: str, task_id: str, **changes: Any
    ) -> JSON:
        return await self._json(
            "PUT", f"{self._tasks(workspace_id, project_id)}/{task_id}", json=changes
        )

    async def delete_task(self, workspace_id: str, project_id: str, task_id: str) -> JSON:
        return await self._json(
            "DELETE", f"{self._tasks(workspace_id, project_id)}/{task_id}"
        )

    # Comments

    def _comments(self, workspace_id: str, project_id: str, task_id: str) -> str:
        return f"{self._tasks(workspace_id, project_id)}/{task_id}/comments"

    async def list_comments(self, workspace_id: str, project_id: str, task_id: str) -> JSON:
        return await self._json("GET", self._comments(workspace_id, project_id, task_id))

    async def create_comment(
        self, workspace_id: str, project_id: str, task_id: str, content: str
    ) -> JSON:
        return await self._json(
            "POST",
            self._comments(workspace_id, project_id, task_id),
            json={"content": content},
        )

    async def update_comment(
        self,
        workspace_id: str,
        project_id: str,
        task_id: str,
        comment_id: str,
        content: str,
    ) -> JSON:
        return await self._json(
            "PUT",
            f"{self._comments(workspace_id, project_id, task_id)}/{comment_id}",
            json={"content": content},
        )

    async def delete_comment(
        self, workspace_id: str, project_id: str, task_id: str, comment_id: str
    ) -> JSON:
        return await self._json(
            "DELETE", f"{self._comments(workspace_id, project_id, task_id)}/{comment_id}"
        )


__all__ = ["TaskboardClient"]
