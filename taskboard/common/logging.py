"""Process-wide logging for the Taskboard API, CLI and client.

Every record is rendered on one line::

    2026-10-19T09:12:00.302Z INFO  taskboard.features.workspaces.service [cid=1f0c...] workspace.create.success workspace_id=... user_id=...

Event names are dotted (``task.update.success``) and context travels as
``extra=log_context(...)`` so it ends up as ``key=value`` pairs. The
correlation id is bound per request by ``RequestContextMiddleware``.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

_correlation_id: ContextVar[str | None] = ContextVar("taskboard_cid", default=None)

# Everything a bare LogRecord carries, plus attributes added by formatting.
_RESERVED_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "asctime",
    "color_message",
    "correlation_id",
    "message",
    "taskName",
}

_ID_FIELDS = ("workspace_id", "project_id", "task_id", "comment_id", "user_id")

_HANDLER_MARKER = "_taskboard_console"

# Third-party loggers routed through the root handler.
_ROUTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "alembic",
    "sqlalchemy",
    "httpx",
)


class ConsoleLogFormatter(logging.Formatter):
    """One line per record: UTC timestamp, level, logger, cid, message, extras."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-5s %(name)s [cid=%(correlation_id)s] %(message)s"
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=UTC)
        return stamp.strftime(datefmt or "%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = _correlation_id.get() or "-"

        line = super().format(record)
        pairs = [
            f"{key}={_render(value)}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        ]
        return " ".join([line, *pairs]) if pairs else line


def setup_logging(level_name: str = "INFO") -> None:
    """Install the console handler on the root logger and set its level.

    Safe to call repeatedly: later calls only change the level.
    """

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    if any(getattr(handler, _HANDLER_MARKER, False) for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(ConsoleLogFormatter())
    setattr(handler, _HANDLER_MARKER, True)
    root.handlers = [handler]

    for name in _ROUTED_LOGGERS:
        routed = logging.getLogger(name)
        routed.handlers.clear()
        routed.propagate = True


def bind_request_context(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def clear_request_context() -> None:
    _correlation_id.set(None)


def log_context(**fields: Any) -> dict[str, Any]:
    """Build an ``extra`` mapping for a log call.

    Resource ids (``workspace_id``, ``project_id``, ``task_id``,
    ``comment_id``, ``user_id``) are stringified and dropped when ``None``;
    other fields pass through unchanged.

        logger.info(
            "comment.create.success",
            extra=log_context(task_id=task.id, comment_id=comment.id, user_id=user.id),
        )
    """

    context: dict[str, Any] = {}
    for key, value in fields.items():
        if key in _ID_FIELDS:
            if value is not None:
                context[key] = str(value)
        else:
            context[key] = value
    return context


def _render(value: Any) -> str:
    if value is None:
        return "null"
    text = str(value)
    if " " in text:
        return repr(text)
    return text


__all__ = [
    "ConsoleLogFormatter",
    "bind_request_context",
    "clear_request_context",
    "log_context",
    "setup_logging",
]
