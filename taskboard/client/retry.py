"""Pure retry/refresh policy for a single logical request.

``evaluate`` inspects the outcome of one attempt and returns a
:class:`Decision`; the HTTP client acts on it. Nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

import httpx

from .errors import ErrorKind

TIMEOUT_MESSAGE = "Request timed out. Please check your connection and try again."
NETWORK_MESSAGE = "Network error. Please check your internet connection."
SERVER_MESSAGE = "Server error. Please try again later."


class Outcome(str, Enum):
    SUCCESS = "success"
    RETRY = "retry"
    REFRESH = "refresh"
    FATAL = "fatal"


@dataclass(frozen=True, slots=True)
class Decision:
    outcome: Outcome
    detail: str | None = None
    kind: ErrorKind | None = None


@dataclass(frozen=True, slots=True)
class RetryContext:
    """Per-request counters; a new instance is produced for every transition."""

    attempt: int = 0
    max_attempts: int = 3
    refreshed: bool = False

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_attempts

    def next_attempt(self) -> RetryContext:
        return replace(self, attempt=self.attempt + 1)

    def mark_refreshed(self) -> RetryContext:
        return replace(self, refreshed=True)


def classify(
    response: httpx.Response | None, error: httpx.TransportError | None
) -> ErrorKind:
    if isinstance(error, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if response is None:
        return ErrorKind.NETWORK
    if response.status_code >= 500:
        return ErrorKind.SERVER
    if response.status_code == 401:
        return ErrorKind.AUTH
    return ErrorKind.CLIENT


def is_retryable(kind: ErrorKind) -> bool:
    return kind in {ErrorKind.TIMEOUT, ErrorKind.NETWORK, ErrorKind.SERVER}


def _body_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    for key in ("error", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def enhance_message(
    response: httpx.Response | None, error: httpx.TransportError | None
) -> str:
    """Human-readable message for a failure that will not be retried."""

    kind = classify(response, error)
    if kind is ErrorKind.TIMEOUT:
        return TIMEOUT_MESSAGE
    if kind is ErrorKind.NETWORK or response is None:
        return NETWORK_MESSAGE
    if kind is ErrorKind.SERVER:
        return SERVER_MESSAGE
    return _body_message(response) or f"Request failed with status code {response.status_code}"


def evaluate(
    *,
    response: httpx.Response | None,
    error: httpx.TransportError | None,
    context: RetryContext,
) -> Decision:
    """Decide what to do after one attempt.

    Order: success, then the one-time refresh on 401, then bounded retry of
    transient failures, otherwise fatal.
    """

    if error is None and response is not None and response.status_code < 400:
        return Decision(Outcome.SUCCESS)

    kind = classify(response, error)
    if kind is ErrorKind.AUTH and not context.refreshed:
        return Decision(Outcome.REFRESH, detail="access token rejected", kind=kind)
    if is_retryable(kind) and context.can_retry:
        return Decision(Outcome.RETRY, detail=kind.value, kind=kind)
    return Decision(Outcome.FATAL, detail=enhance_message(response, error), kind=kind)


__all__ = [
    "Decision",
    "NETWORK_MESSAGE",
    "Outcome",
    "RetryContext",
    "SERVER_MESSAGE",
    "TIMEOUT_MESSAGE",
    "classify",
    "enhance_message",
    "evaluate",
    "is_retryable",
]
