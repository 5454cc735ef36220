"""Password rules and scrypt hashing.

Stored format: ``scrypt$<n>$<r>$<p>$<salt>$<key>`` with unpadded urlsafe
base64 salt and key, so cost parameters travel with each hash.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import os
import secrets

SCHEME = "scrypt"
MIN_PASSWORD_LENGTH = 8

_COST = 2**14
_FAST_COST = 2**10  # TASKBOARD_TEST_FAST_HASH
_BLOCK_SIZE = 8
_PARALLELISM = 1
_SALT_BYTES = 16
_KEY_BYTES = 32


def validate_password_strength(password: str) -> None:
    """Raise ``ValueError`` naming the first rule ``password`` breaks."""

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not any(char.islower() for char in password):
        raise ValueError("Password must contain a lowercase letter")
    if not any(char.isupper() for char in password):
        raise ValueError("Password must contain an uppercase letter")
    if not any(char.isdigit() for char in password):
        raise ValueError("Password must contain a number")


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _derive(password: str, salt: bytes, *, n: int, r: int, p: int, length: int) -> bytes:
    return hashlib.scrypt(password.encode("utf-8"), salt=salt, n=n, r=r, p=p, dklen=length)


def hash_password(password: str) -> str:
    if not password.strip():
        raise ValueError("Password must not be empty")

    cost = _FAST_COST if os.getenv("TASKBOARD_TEST_FAST_HASH") else _COST
    salt = secrets.token_bytes(_SALT_BYTES)
    key = _derive(password, salt, n=cost, r=_BLOCK_SIZE, p=_PARALLELISM, length=_KEY_BYTES)
    return "$".join(
        [SCHEME, str(cost), str(_BLOCK_SIZE), str(_PARALLELISM), _b64(salt), _b64(key)]
    )


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored hash; malformed hashes never match."""

    parts = hashed.split("$")
    if len(parts) != 6 or parts[0] != SCHEME:
        return False
    try:
        n, r, p = (int(value) for value in parts[1:4])
        salt, expected = _unb64(parts[4]), _unb64(parts[5])
        candidate = _derive(password, salt, n=n, r=r, p=p, length=len(expected))
    except ValueError:
        return False
    return hmac.compare_digest(candidate, expected)
