"""Taskboard API settings, read from ``TASKBOARD_*`` variables and ``.env``."""

from __future__ import annotations

import json
import re
import secrets
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, PrivateAttr, SecretStr, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from sqlalchemy.engine import make_url

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DB_FILENAME = "taskboard.sqlite"
DEFAULT_SQLITE_PATH = Path("./data/db") / DEFAULT_DB_FILENAME
DEFAULT_CORS_ORIGINS = ["http://localhost:5173"]
MIN_JWT_SECRET_LENGTH = 32

_DURATION = re.compile(r"^(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>[smhd]?)$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: Any, *, name: str) -> timedelta:
    """Turn ``900``, ``"900"``, ``"15m"``, ``"1h"`` or ``"7d"`` into a ``timedelta``."""

    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, bool):
        raise TypeError(f"{name} must be a duration")
    elif isinstance(value, (int, float)):
        duration = timedelta(seconds=value)
    elif isinstance(value, str):
        match = _DURATION.match(value.strip())
        if match is None:
            raise ValueError(f"{name} must be seconds or a duration like '30s', '15m', '1h', '7d'")
        seconds = float(match["amount"]) * _UNIT_SECONDS[match["unit"].lower()]
        duration = timedelta(seconds=seconds)
    else:
        raise TypeError(f"{name} must be a duration")

    if duration <= timedelta(0):
        raise ValueError(f"{name} must be greater than zero")
    return duration


def parse_origin_list(value: Any) -> list[str]:
    """Accept a JSON array or a comma-separated string; drop blanks and repeats."""

    if value is None or value == "":
        return list(DEFAULT_CORS_ORIGINS)
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError("CORS origins must be a JSON array or comma-separated") from exc
            if not isinstance(value, list):
                raise ValueError("CORS origins must be a JSON array or comma-separated")
        else:
            value = text.split(",")
    if not isinstance(value, (list, tuple, set)):
        raise TypeError("CORS origins must be a list or string")

    cleaned = (str(item).strip() for item in value)
    return list(dict.fromkeys(item for item in cleaned if item))


class Settings(BaseSettings):
    """Runtime configuration for the API process."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    app_name: str = "Taskboard API"
    app_version: str = "0.1.0"
    debug: bool = False
    api_docs_enabled: bool = True
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"
    logging_level: str = "INFO"

    server_host: str = "localhost"
    server_port: int = Field(8000, gt=0, lt=65536)
    server_cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS)
    )

    database_dsn: str | None = None
    database_echo: bool = False
    database_auto_create: bool = Field(
        default=True,
        description="Create missing tables at startup instead of requiring `taskboard migrate`.",
    )
    alembic_ini_path: Path = PROJECT_ROOT / "alembic.ini"

    jwt_secret: SecretStr | None = None
    jwt_algorithm: str = "HS256"
    jwt_access_ttl: timedelta = timedelta(minutes=15)
    jwt_refresh_ttl: timedelta = timedelta(days=7)

    _jwt_secret_generated: bool = PrivateAttr(default=False)

    @field_validator("logging_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper() or "INFO"

    @field_validator("server_cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> list[str]:
        return parse_origin_list(value)

    @field_validator("jwt_secret", mode="before")
    @classmethod
    def _check_secret(cls, value: Any) -> SecretStr | None:
        raw = value.get_secret_value() if isinstance(value, SecretStr) else str(value or "")
        raw = raw.strip()
        if not raw:
            return None
        if len(raw) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"TASKBOARD_JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters."
            )
        return SecretStr(raw)

    @field_validator("jwt_access_ttl", "jwt_refresh_ttl", mode="before")
    @classmethod
    def _parse_ttl(cls, value: Any, info: ValidationInfo) -> timedelta:
        return parse_duration(value, name=f"TASKBOARD_{info.field_name.upper()}")

    @model_validator(mode="after")
    def _finalise(self) -> Settings:
        dsn = self.database_dsn or f"sqlite+aiosqlite:///{DEFAULT_SQLITE_PATH.resolve().as_posix()}"
        url = make_url(dsn)
        if url.drivername == "sqlite":
            url = url.set(drivername="sqlite+aiosqlite")
        self.database_dsn = url.render_as_string(hide_password=False)

        if self.jwt_refresh_ttl <= self.jwt_access_ttl:
            raise ValueError("TASKBOARD_JWT_REFRESH_TTL must be longer than the access TTL")

        if self.jwt_secret is None:
            self.jwt_secret = SecretStr(secrets.token_urlsafe(64))
            self._jwt_secret_generated = True
        return self

    @property
    def jwt_secret_value(self) -> str:
        return self.jwt_secret.get_secret_value()

    @property
    def jwt_secret_generated(self) -> bool:
        """True when no secret was configured and one was minted for this process."""

        return self._jwt_secret_generated


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again."""

    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "DEFAULT_CORS_ORIGINS",
    "DEFAULT_DB_FILENAME",
    "Settings",
    "get_settings",
    "parse_duration",
    "reload_settings",
]
