"""Taskboard: multi-tenant task management API and client."""

from .settings import Settings, get_settings, reload_settings

__version__ = "0.1.0"

__all__ = ["Settings", "__version__", "get_settings", "reload_settings"]
