"""Async API client with token refresh and bounded retries."""

from .api import TaskboardClient
from .errors import ApiError, ErrorKind
from .http import HttpClient, RequestState
from .retry import Decision, Outcome, RetryContext, evaluate
from .session import FileTokenStore, MemoryTokenStore, Session, TokenStore, Tokens
from .settings import ClientSettings, get_client_settings

__all__ = [
    "ApiError",
    "ClientSettings",
    "Decision",
    "ErrorKind",
    "FileTokenStore",
    "HttpClient",
    "MemoryTokenStore",
    "Outcome",
    "RequestState",
    "RetryContext",
    "Session",
    "TaskboardClient",
    "TokenStore",
    "Tokens",
    "evaluate",
    "get_client_settings",
]
