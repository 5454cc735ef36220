"""Password hashing and token helpers."""

from .hashing import hash_password, validate_password_strength, verify_password
from .tokens import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenPayload,
    create_access_token,
    create_refresh_token,
    decode_token,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "TokenPayload",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "hash_password",
    "validate_password_strength",
    "verify_password",
]
