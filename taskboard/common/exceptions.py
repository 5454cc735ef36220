"""Exception handlers that give every failure the ``{"error": "<message>"}`` shape.

Domain errors and request validation failures answer 400, authentication
failures 401, and anything unexpected 500 with a generic message. Tracebacks
and persistence details stay in the log.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .errors import AuthenticationError, TaskboardError
from .logging import log_context

logger = logging.getLogger("taskboard.errors")

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(
    status_code: int, message: str, *, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def _request_fields(request: Request) -> dict[str, str]:
    return {"method": request.method, "path": request.url.path}


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    logger.debug(
        "request.rejected",
        extra=log_context(
            **_request_fields(request), error_type=type(exc).__name__, detail=exc.message
        ),
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return error_response(exc.status_code, exc.message, headers=headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first schema error as ``"<field>: <reason>"``."""

    errors = exc.errors()
    if not errors:
        return error_response(400, "Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = first.get("msg", "Invalid request")
    return error_response(400, f"{field}: {reason}" if field else reason)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    # Routing errors (404, 405) arrive here; only server-side ones are worth logging.
    if exc.status_code >= 500:
        logger.error(
            "request.http_error",
            extra=log_context(**_request_fields(request), status_code=exc.status_code),
        )
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(exc.status_code, message, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        extra=log_context(
            **_request_fields(request),
            exception_type=type(exc).__name__,
            detail=str(exc),
        ),
        exc_info=exc,
    )
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "error_response",
    "http_exception_handler",
    "register_exception_handlers",
    "request_validation_handler",
    "taskboard_error_handler",
    "unhandled_exception_handler",
]
