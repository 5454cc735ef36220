"""Request and response bodies for the authentication endpoints."""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator

from taskboard.common.schema import BaseSchema, EmailAddress

from ..users.schemas import UserOut


class RegisterRequest(BaseSchema):
    email: EmailAddress
    password: SecretStr
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name is required")
        return cleaned


class LoginRequest(BaseSchema):
    email: str = Field(min_length=1, max_length=320)
    password: SecretStr


class RefreshRequest(BaseSchema):
    refresh_token: str = Field(min_length=1)


class AuthResponse(BaseSchema):
    message: str
    user: UserOut
    access_token: str
    refresh_token: str


class RefreshResponse(BaseSchema):
    access_token: str


class MeResponse(BaseSchema):
    user: UserOut


__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MeResponse",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
]
