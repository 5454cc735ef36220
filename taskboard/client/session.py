"""Client-side session state and the stores that persist it."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Tokens:
    access_token: str
    refresh_token: str | None = None


class TokenStore(Protocol):
    def load(self) -> Tokens | None: ...

    def save(self, tokens: Tokens) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Keeps tokens for the lifetime of the process only."""

    def __init__(self, tokens: Tokens | None = None) -> None:
        self._tokens = tokens

    def load(self) -> Tokens | None:
        return self._tokens

    def save(self, tokens: Tokens) -> None:
        self._tokens = tokens

    def clear(self) -> None:
        self._tokens = None


class FileTokenStore:
    """Persists tokens as JSON so CLI invocations share a session."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Tokens | None:
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("client.session.load_failed", extra={"path": str(self.path)})
            return None
        access = payload.get("access_token") if isinstance(payload, dict) else None
        if not access:
            return None
        return Tokens(access_token=access, refresh_token=payload.get("refresh_token"))

    def save(self, tokens: Tokens) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            # An existing file keeps its old mode through os.open.
            os.chmod(self.path, 0o600)
            handle.write(json.dumps(asdict(tokens)))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class Session:
    """Holds the bearer and refresh tokens used by the HTTP client.

    Lifecycle: ``init()`` loads whatever the store persisted, ``establish()``
    replaces both tokens after login/register, ``refresh()`` swaps in a new
    access token, and ``clear()`` forgets everything.
    """

    def __init__(self, store: TokenStore | None = None) -> None:
        self._store: TokenStore = store or MemoryTokenStore()
        self._tokens: Tokens | None = None

    @property
    def access_token(self) -> str | None:
        return self._tokens.access_token if self._tokens else None

    @property
    def refresh_token(self) -> str | None:
        return self._tokens.refresh_token if self._tokens else None

    @property
    def is_authenticated(self) -> bool:
        return self._tokens is not None

    def init(self) -> Session:
        self._tokens = self._store.load()
        return self

    def establish(self, access_token: str, refresh_token: str | None) -> None:
        self._tokens = Tokens(access_token=access_token, refresh_token=refresh_token)
        self._store.save(self._tokens)

    def refresh(self, access_token: str) -> None:
        refresh_token = self.refresh_token
        self._tokens = Tokens(access_token=access_token, refresh_token=refresh_token)
        self._store.save(self._tokens)

    def clear(self) -> None:
        self._tokens = None
        self._store.clear()


__all__ = ["FileTokenStore", "MemoryTokenStore", "Session", "TokenStore", "Tokens"]
