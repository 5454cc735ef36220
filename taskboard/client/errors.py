"""Errors surfaced to callers of the API client."""

from __future__ import annotations

from enum import Enum

import httpx


class ErrorKind(str, Enum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    SERVER = "server"
    CLIENT = "client"
    AUTH = "auth"


class ApiError(Exception):
    """Terminal failure of a logical request, after retries and refresh."""

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        status_code: int | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.response = response

    def __repr__(self) -> str:
        return (
            f"ApiError(kind={self.kind.value!r}, status_code={self.status_code!r}, "
            f"message={self.message!r})"
        )


__all__ = ["ApiError", "ErrorKind"]
