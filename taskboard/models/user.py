"""User accounts."""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from taskboard.db import Base, TimestampMixin, UUIDPrimaryKeyMixin


def _canonicalise_email(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        msg = "Email must not be empty"
        raise ValueError(msg)
    return cleaned.lower()


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A person who can sign in and join workspaces."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @validates("email")
    def _validate_email(self, _key: str, value: str) -> str:
        return _canonicalise_email(value)


__all__ = ["User"]
