"""API router composition for the Taskboard FastAPI application."""

from __future__ import annotations

from fastapi import APIRouter

from .features.auth.router import router as auth_router
from .features.comments.router import router as comments_router
from .features.health.router import router as health_router
from .features.members.router import router as members_router
from .features.projects.router import router as projects_router
from .features.tasks.router import router as tasks_router
from .features.workspaces.router import router as workspaces_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(workspaces_router)
api_router.include_router(members_router)
api_router.include_router(projects_router)
api_router.include_router(tasks_router)
api_router.include_router(comments_router)

__all__ = ["api_router"]
