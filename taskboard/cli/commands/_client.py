"""Shared construction of the file-backed API client used by CLI commands."""

from __future__ import annotations

from taskboard.client import FileTokenStore, Session, TaskboardClient, get_client_settings


def _announce_expiry() -> None:
    print("Session expired. Run `taskboard login` again.")


def build_client() -> TaskboardClient:
    settings = get_client_settings()
    session = Session(FileTokenStore(settings.token_file)).init()
    return TaskboardClient(settings, session=session, on_session_expired=_announce_expiry)


__all__ = ["build_client"]
