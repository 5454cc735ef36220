"""Public user representation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from taskboard.common.schema import BaseSchema


class UserOut(BaseSchema):
    id: UUID
    email: str
    name: str
    created_at: datetime


__all__ = ["UserOut"]
