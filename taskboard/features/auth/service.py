"""Registration, credential checks and token issuance."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.common.errors import AuthenticationError, ValidationError
from taskboard.common.logging import log_context
from taskboard.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    validate_password_strength,
    verify_password,
)
from taskboard.models import User
from taskboard.settings import Settings

from ..users.repository import UsersRepository

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(slots=True)
class IssuedTokens:
    user: User
    access_token: str
    refresh_token: str


class AuthService:
    """Authenticate users and mint JWT access/refresh pairs."""

    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._users = UsersRepository(session)

    @property
    def settings(self) -> Settings:
        return self._settings

    async def register(self, *, email: str, password: str, name: str) -> IssuedTokens:
        try:
            validate_password_strength(password)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        if await self._users.get_by_email(email) is not None:
            logger.info("auth.register.conflict")
            raise ValidationError("User with this email already exists")

        try:
            user = await self._users.create(
                email=email,
                name=name,
                password_hash=hash_password(password),
            )
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ValidationError("User with this email already exists") from exc

        logger.info("auth.register.success", extra=log_context(user_id=user.id))
        return self._issue(user)

    async def login(self, *, email: str, password: str) -> IssuedTokens:
        user = await self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("auth.login.failed")
            raise AuthenticationError(_INVALID_CREDENTIALS)
        if not user.is_active:
            logger.info("auth.login.inactive", extra=log_context(user_id=user.id))
            raise AuthenticationError("User account is disabled")

        logger.info("auth.login.success", extra=log_context(user_id=user.id))
        return self._issue(user)

    async def refresh(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token."""

        payload = decode_token(
            refresh_token, settings=self._settings, expected_type=REFRESH_TOKEN_TYPE
        )
        user = await self._resolve_active_user(payload.user_id)
        logger.debug("auth.refresh.success", extra=log_context(user_id=user.id))
        return create_access_token(user.id, self._settings)

    async def authenticate_access_token(self, token: str) -> User:
        payload = decode_token(
            token, settings=self._settings, expected_type=ACCESS_TOKEN_TYPE
        )
        return await self._resolve_active_user(payload.user_id)

    async def _resolve_active_user(self, user_id) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid token")
        return user

    def _issue(self, user: User) -> IssuedTokens:
        return IssuedTokens(
            user=user,
            access_token=create_access_token(user.id, self._settings),
            refresh_token=create_refresh_token(user.id, self._settings),
        )


__all__ = ["AuthService", "IssuedTokens"]
