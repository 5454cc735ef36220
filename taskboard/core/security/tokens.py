"""JWT helpers for issuing and decoding access/refresh tokens."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from taskboard.common.errors import AuthenticationError
from taskboard.settings import Settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True, slots=True)
class TokenPayload:
    user_id: uuid.UUID
    token_type: str
    issued_at: datetime
    expires_at: datetime


def _encode(
    user_id: uuid.UUID, *, token_type: str, ttl: timedelta, settings: Settings
) -> str:
    now = datetime.now(UTC)
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
        # Unique per issue so two tokens minted in the same second differ.
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, settings.jwt_secret_value, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: uuid.UUID, settings: Settings) -> str:
    return _encode(
        user_id,
        token_type=ACCESS_TOKEN_TYPE,
        ttl=settings.jwt_access_ttl,
        settings=settings,
    )


def create_refresh_token(user_id: uuid.UUID, settings: Settings) -> str:
    return _encode(
        user_id,
        token_type=REFRESH_TOKEN_TYPE,
        ttl=settings.jwt_refresh_ttl,
        settings=settings,
    )


def decode_token(token: str, *, settings: Settings, expected_type: str) -> TokenPayload:
    """Decode ``token`` and ensure it carries ``expected_type``.

    Every decoding failure (bad signature, expiry, malformed subject, wrong
    token type) surfaces as :class:`AuthenticationError`.
    """

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret_value,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise AuthenticationError("Invalid token") from exc

    if claims.get("type") != expected_type:
        raise AuthenticationError("Invalid token type")
    try:
        user_id = uuid.UUID(str(claims["sub"]))
    except ValueError as exc:
        raise AuthenticationError("Invalid token") from exc

    return TokenPayload(
        user_id=user_id,
        token_type=expected_type,
        issued_at=datetime.fromtimestamp(int(claims["iat"]), tz=UTC),
        expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=UTC),
    )
