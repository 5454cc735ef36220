"""Client configuration (env prefix ``TASKBOARD_CLIENT_``)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TOKEN_FILE = Path("~/.config/taskboard/session.json")


class ClientSettings(BaseSettings):
    """Tunables for :class:`taskboard.client.TaskboardClient`."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(10.0, gt=0)
    retry_base_delay: float = Field(1.0, ge=0)
    max_retries: int = Field(3, ge=0)
    token_file: Path = DEFAULT_TOKEN_FILE

    @field_validator("base_url", mode="before")
    @classmethod
    def _v_base_url(cls, v: object) -> str:
        value = str(v or "").strip().rstrip("/")
        return value or DEFAULT_BASE_URL

    @field_validator("token_file", mode="after")
    @classmethod
    def _v_token_file(cls, v: Path) -> Path:
        return v.expanduser()

    def backoff_seconds(self, retry_count: int) -> float:
        """Delay before retry number ``retry_count + 1`` (1s, 2s, 4s by default)."""

        return self.retry_base_delay * (2**retry_count)


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    return ClientSettings()


__all__ = ["ClientSettings", "get_client_settings"]
