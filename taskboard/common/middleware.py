"""Request correlation and CORS middleware."""

from __future__ import annotations

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from taskboard.settings import Settings

from .logging import bind_request_context, clear_request_context, log_context

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger("taskboard.request")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id for the request and log how it ended.

    The id comes from ``X-Request-ID`` when the caller sends one and is echoed
    back on the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.correlation_id = correlation_id
        bind_request_context(correlation_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            # The traceback is logged by the unhandled-exception handler.
            logger.error(
                "request.error",
                extra=log_context(
                    method=request.method,
                    path=request.url.path,
                    duration_ms=_elapsed_ms(started),
                ),
            )
            clear_request_context()
            raise

        logger.info(
            "request.complete",
            extra=log_context(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            ),
        )
        clear_request_context()
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 2)


def register_middleware(app: FastAPI, settings: Settings) -> None:
    if settings.server_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.server_cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    # Added last so it wraps CORS and sees every request first.
    app.add_middleware(RequestContextMiddleware)


__all__ = ["REQUEST_ID_HEADER", "RequestContextMiddleware", "register_middleware"]
