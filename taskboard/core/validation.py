"""Small text-normalisation helpers used by the resource services."""

from __future__ import annotations

from taskboard.common.errors import ValidationError


def require_text(value: str | None, *, message: str) -> str:
    """Return ``value`` stripped, raising ``ValidationError`` when it is blank."""

    if value is None:
        raise ValidationError(message)
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(message)
    return cleaned


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


__all__ = ["optional_text", "require_text"]
