"""HTTP transport with bearer injection, bounded retries and token refresh."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any

import httpx

from .errors import ApiError, ErrorKind
from .retry import Decision, Outcome, RetryContext, classify, enhance_message, evaluate
from .session import Session
from .settings import ClientSettings, get_client_settings

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
REFRESH_PATH = "/auth/refresh"

SleepFunc = Callable[[float], Awaitable[None]]
SessionExpiredHook = Callable[[], Awaitable[None] | None]


class RequestState(str, Enum):
    SENDING = "sending"
    AWAITING_REFRESH = "awaiting_refresh"
    RETRYING = "retrying"
    DONE = "done"


class HttpClient:
    """Issue requests against the Taskboard API on behalf of a :class:`Session`.

    Every logical request runs a small state machine: SENDING produces a
    :class:`Decision`; REFRESH moves to AWAITING_REFRESH (at most once),
    RETRY moves to RETRYING (sleep, then SENDING again), SUCCESS and FATAL
    finish in DONE.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc = asyncio.sleep,
        on_session_expired: SessionExpiredHook | None = None,
    ) -> None:
        self.settings = settings or get_client_settings()
        self.session = session or Session()
        self._sleep = sleep
        self._on_session_expired = on_session_expired
        self._client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        # Refresh calls bypass bearer injection and the retry policy.
        self._bare_client = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()
        await self._bare_client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Send one logical request and return the successful response.

        Unauthenticated requests (login, register) never attempt a refresh.
        """

        context = RetryContext(
            max_attempts=self.settings.max_retries,
            refreshed=not authenticated,
        )
        state = RequestState.SENDING
        decision = Decision(Outcome.FATAL)
        response: httpx.Response | None = None

        while state is not RequestState.DONE:
            if state is RequestState.SENDING:
                response, error = await self._send(
                    method, url, json=json, params=params, authenticated=authenticated
                )
                decision = evaluate(response=response, error=error, context=context)
                state = self._transition(decision)
            elif state is RequestState.AWAITING_REFRESH:
                context = context.mark_refreshed()
                await self._refresh_access_token()
                state = RequestState.SENDING
            elif state is RequestState.RETRYING:
                delay = self.settings.backoff_seconds(context.attempt)
                context = context.next_attempt()
                logger.warning(
                    "client.request.retry",
                    extra={
                        "method": method,
                        "url": url,
                        "attempt": context.attempt,
                        "delay_seconds": delay,
                        "reason": decision.detail,
                    },
                )
                await self._sleep(delay)
                state = RequestState.SENDING

        if decision.outcome is Outcome.SUCCESS and response is not None:
            return response

        status_code = response.status_code if response is not None else None
        logger.info(
            "client.request.failed",
            extra={
                "method": method,
                "url": url,
                "status_code": status_code,
                "kind": decision.kind.value if decision.kind else None,
            },
        )
        raise ApiError(
            decision.detail or "Request failed",
            kind=decision.kind or ErrorKind.CLIENT,
            status_code=status_code,
            response=response,
        )

    @staticmethod
    def _transition(decision: Decision) -> RequestState:
        if decision.outcome is Outcome.REFRESH:
            return RequestState.AWAITING_REFRESH
        if decision.outcome is Outcome.RETRY:
            return RequestState.RETRYING
        return RequestState.DONE

    async def _send(
        self,
        method: str,
        url: str,
        *,
        json: Any,
        params: Mapping[str, Any] | None,
        authenticated: bool,
    ) -> tuple[httpx.Response | None, httpx.TransportError | None]:
        headers: dict[str, str] = {}
        token = self.session.access_token
        if authenticated and token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = await self._client.request(
                method, url, json=json, params=params, headers=headers
            )
        except httpx.TransportError as exc:
            logger.debug(
                "client.request.transport_error",
                extra={"method": method, "url": url, "error": type(exc).__name__},
            )
            return None, exc
        return response, None

    async def _refresh_access_token(self) -> None:
        refresh_token = self.session.refresh_token
        if not refresh_token:
            await self._expire_session()
            raise ApiError(SESSION_EXPIRED_MESSAGE, kind=ErrorKind.AUTH, status_code=401)

        try:
            response = await self._bare_client.post(
                REFRESH_PATH, json={"refresh_token": refresh_token}
            )
        except httpx.TransportError as exc:
            raise ApiError(
                enhance_message(None, exc), kind=classify(None, exc)
            ) from exc

        if response.status_code == 401:
            await self._expire_session()
            raise ApiError(
                SESSION_EXPIRED_MESSAGE,
                kind=ErrorKind.AUTH,
                status_code=401,
                response=response,
            )
        if response.status_code >= 400:
            raise ApiError(
                enhance_message(response, None),
                kind=classify(response, None),
                status_code=response.status_code,
                response=response,
            )

        try:
            access_token = response.json()["access_token"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ApiError(
                "Malformed refresh response",
                kind=ErrorKind.SERVER,
                status_code=response.status_code,
                response=response,
            ) from exc
        self.session.refresh(access_token)
        logger.info("client.session.refreshed")

    async def _expire_session(self) -> None:
        self.session.clear()
        logger.info("client.session.expired")
        if self._on_session_expired is not None:
            result = self._on_session_expired()
            if inspect.isawaitable(result):
                await result


__all__ = ["HttpClient", "RequestState", "SESSION_EXPIRED_MESSAGE"]
