"""Shared Pydantic schema utilities."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


EmailAddress = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(str.lower)]
"""Syntactically valid email address, trimmed and lower-cased."""


class BaseSchema(BaseModel):
    """Base class for all API schemas."""

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        extra="ignore",
    )


class MessageResponse(BaseSchema):
    """Acknowledgement body returned by mutations without a resource."""

    message: str


class ErrorMessage(BaseSchema):
    """Uniform error body: ``{"error": "..."}``."""

    error: str


__all__ = ["BaseSchema", "EmailAddress", "ErrorMessage", "MessageResponse"]
