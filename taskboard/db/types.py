"""Column types used by every Taskboard table."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.types import CHAR, DateTime, TypeDecorator

__all__ = ["GUID", "UTCDateTime", "enum_values"]


class GUID(TypeDecorator[uuid.UUID]):
    """UUIDs stored as canonical 36-character strings, loaded as ``uuid.UUID``."""

    impl = CHAR(36)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:
        if value is None:
            return None
        return str(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))

    def process_result_value(self, value: Any, dialect: Any) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))

    @property
    def python_type(self) -> type[uuid.UUID]:
        return uuid.UUID


def _as_utc(value: datetime) -> datetime:
    # SQLite hands naive datetimes back; they were written as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetimes, always normalised to UTC on the way in and out."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Any:
        return _as_utc(value) if isinstance(value, datetime) else value

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        return _as_utc(value) if isinstance(value, datetime) else value


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """``values_callable`` for ``sqlalchemy.Enum`` so rows store ``.value``, not names."""

    return [member.value for member in enum_cls]
