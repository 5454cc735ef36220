"""Fixtures for exercising the API client against a scripted transport."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import pytest

from taskboard.client import ClientSettings, MemoryTokenStore, Session, Tokens

Responder = Callable[[httpx.Request], httpx.Response]


@dataclass
class ScriptedTransport:
    """Serve queued responses (or raise queued errors) and record every request."""

    steps: list[httpx.Response | Exception | Responder] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.steps:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        if callable(step):
            return step(request)
        return step

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@dataclass
class RecordingSleep:
    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture()
def client_settings() -> ClientSettings:
    return ClientSettings(
        base_url="http://api.test/",
        timeout=5,
        retry_base_delay=1.0,
        max_retries=3,
    )


@pytest.fixture()
def scripted() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture()
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def signed_in_session() -> Session:
    store = MemoryTokenStore(Tokens(access_token="old-access", refresh_token="refresh-1"))
    return Session(store).init()
