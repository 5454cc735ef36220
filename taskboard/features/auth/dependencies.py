"""FastAPI dependencies for authenticated routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.common.dependencies import SettingsDep
from taskboard.common.errors import AuthenticationError
from taskboard.db import SessionDep
from taskboard.models import User

from .service import AuthService

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
    session: SessionDep,
    settings: SettingsDep,
) -> User:
    """Resolve the user behind the ``Authorization: Bearer`` header."""

    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")
    service = AuthService(session=session, settings=settings)
    user = await service.authenticate_access_token(credentials.credentials)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]

__all__ = ["CurrentUser", "get_current_user"]
