"""Decision table for a single request attempt."""

from __future__ import annotations

import httpx
import pytest

from taskboard.client import Decision, ErrorKind, Outcome, RetryContext, evaluate
from taskboard.client.retry import (
    NETWORK_MESSAGE,
    SERVER_MESSAGE,
    TIMEOUT_MESSAGE,
    classify,
    enhance_message,
)

_REQUEST = httpx.Request("GET", "http://api.test/workspaces")


def _response(status: int, body: object | None = None) -> httpx.Response:
    if body is None:
        return httpx.Response(status, request=_REQUEST)
    return httpx.Response(status, json=body, request=_REQUEST)


def test_success_response() -> None:
    decision = evaluate(response=_response(200, {}), error=None, context=RetryContext())

    assert decision == Decision(Outcome.SUCCESS)


def test_first_401_requests_refresh() -> None:
    decision = evaluate(
        response=_response(401, {"error": "Invalid token"}),
        error=None,
        context=RetryContext(),
    )

    assert decision.outcome is Outcome.REFRESH
    assert decision.kind is ErrorKind.AUTH


def test_second_401_is_fatal_with_body_message() -> None:
    decision = evaluate(
        response=_response(401, {"error": "Invalid token"}),
        error=None,
        context=RetryContext().mark_refreshed(),
    )

    assert decision.outcome is Outcome.FATAL
    assert decision.detail == "Invalid token"


@pytest.mark.parametrize(
    ("response", "error", "kind"),
    [
        (None, httpx.ConnectError("refused", request=_REQUEST), ErrorKind.NETWORK),
        (None, httpx.ReadTimeout("slow", request=_REQUEST), ErrorKind.TIMEOUT),
        (_response(503), None, ErrorKind.SERVER),
    ],
)
def test_transient_failures_retry_until_budget_is_spent(
    response: httpx.Response | None, error: httpx.TransportError | None, kind: ErrorKind
) -> None:
    context = RetryContext(max_attempts=2)

    first = evaluate(response=response, error=error, context=context)
    exhausted = evaluate(
        response=response, error=error, context=context.next_attempt().next_attempt()
    )

    assert first.outcome is Outcome.RETRY
    assert first.kind is kind
    assert exhausted.outcome is Outcome.FATAL
    assert exhausted.kind is kind


def test_client_errors_are_not_retried() -> None:
    decision = evaluate(
        response=_response(400, {"error": "Project name is required"}),
        error=None,
        context=RetryContext(),
    )

    assert decision == Decision(
        Outcome.FATAL, detail="Project name is required", kind=ErrorKind.CLIENT
    )


def test_retry_context_is_immutable() -> None:
    context = RetryContext()

    advanced = context.next_attempt().mark_refreshed()

    assert (context.attempt, context.refreshed) == (0, False)
    assert (advanced.attempt, advanced.refreshed) == (1, True)
    assert RetryContext(attempt=3, max_attempts=3).can_retry is False


def test_enhanced_messages() -> None:
    assert enhance_message(None, httpx.ReadTimeout("t", request=_REQUEST)) == TIMEOUT_MESSAGE
    assert enhance_message(None, httpx.ConnectError("c", request=_REQUEST)) == NETWORK_MESSAGE
    assert enhance_message(_response(500, {"error": "boom"}), None) == SERVER_MESSAGE
    assert enhance_message(_response(404, {"message": "gone"}), None) == "gone"
    assert (
        enhance_message(_response(418), None) == "Request failed with status code 418"
    )


def test_classify_plain_statuses() -> None:
    assert classify(_response(401), None) is ErrorKind.AUTH
    assert classify(_response(403), None) is ErrorKind.CLIENT
    assert classify(_response(502), None) is ErrorKind.SERVER
