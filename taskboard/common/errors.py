"""Domain error types raised by services and translated at the HTTP boundary."""

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for user-presentable domain failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(TaskboardError):
    """Raised when input fails a domain rule (empty name, bad role, ...)."""


class PermissionDeniedError(TaskboardError):
    """Raised when the caller's membership role is insufficient."""


class NotFoundError(TaskboardError):
    """Raised when a resource is absent from the claimed parent scope."""


class AuthenticationError(TaskboardError):
    """Raised when credentials are missing, invalid, or expired."""

    status_code = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


__all__ = [
    "AuthenticationError",
    "NotFoundError",
    "PermissionDeniedError",
    "TaskboardError",
    "ValidationError",
]
