"""Request-scoped dependencies shared across routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from taskboard.settings import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""

    settings = getattr(request.app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_app_settings)]

__all__ = ["SettingsDep", "get_app_settings"]
