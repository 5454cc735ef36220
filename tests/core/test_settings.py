from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from taskboard import Settings, get_settings, reload_settings

_SECRET = "x" * 40


@pytest.fixture(autouse=True)
def reset_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Iterator[None]:
    """Ensure settings cache and env overrides are cleared between tests."""

    for var in [name for name in os.environ if name.startswith("TASKBOARD_")]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


def test_settings_defaults() -> None:
    settings = reload_settings()

    assert settings.app_name == "Taskboard API"
    assert settings.server_port == 8000
    assert settings.jwt_algorithm == "HS256"
    assert settings.jwt_access_ttl == timedelta(minutes=15)
    assert settings.jwt_refresh_ttl == timedelta(days=7)
    assert settings.database_dsn.startswith("sqlite+aiosqlite:///")
    assert settings.database_dsn.endswith("data/db/taskboard.sqlite")
    assert settings.jwt_secret_generated is True
    assert len(settings.jwt_secret_value) >= 32


def test_get_settings_is_cached() -> None:
    first = reload_settings()

    assert get_settings() is first
    assert reload_settings() is not first


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKBOARD_JWT_SECRET", _SECRET)
    monkeypatch.setenv("TASKBOARD_JWT_ACCESS_TTL", "5m")
    monkeypatch.setenv("TASKBOARD_JWT_REFRESH_TTL", "2d")
    monkeypatch.setenv("TASKBOARD_SERVER_CORS_ORIGINS", "http://a.test, http://b.test,http://a.test")
    monkeypatch.setenv("TASKBOARD_DATABASE_DSN", "sqlite:///./local.sqlite")
    monkeypatch.setenv("TASKBOARD_LOGGING_LEVEL", "debug")

    settings = reload_settings()

    assert settings.jwt_secret_value == _SECRET
    assert settings.jwt_secret_generated is False
    assert settings.jwt_access_ttl == timedelta(minutes=5)
    assert settings.jwt_refresh_ttl == timedelta(days=2)
    assert settings.server_cors_origins == ["http://a.test", "http://b.test"]
    assert settings.database_dsn == "sqlite+aiosqlite:///./local.sqlite"
    assert settings.logging_level == "DEBUG"


def test_cors_origins_accept_json_arrays() -> None:
    settings = Settings(server_cors_origins='["http://x.test", ""]')

    assert settings.server_cors_origins == ["http://x.test"]


def test_short_jwt_secret_is_rejected() -> None:
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(jwt_secret="too-short")


def test_refresh_ttl_must_exceed_access_ttl() -> None:
    with pytest.raises(ValidationError, match="REFRESH_TTL"):
        Settings(jwt_access_ttl="1h", jwt_refresh_ttl="30m")


@pytest.mark.parametrize("value", ["0", "-5", "soon", "5w", ""])
def test_invalid_durations_are_rejected(value: str) -> None:
    with pytest.raises(ValidationError):
        Settings(jwt_access_ttl=value)
