from __future__ import annotations

from fastapi import APIRouter, Body, status

from taskboard.common.dependencies import SettingsDep
from taskboard.common.schema import ErrorMessage
from taskboard.db import SessionDep

from ..users.schemas import UserOut
from .dependencies import CurrentUser
from .schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
)
from .service import AuthService, IssuedTokens

router = APIRouter(prefix="/auth", tags=["auth"])

_AUTH_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorMessage},
}


def _auth_response(message: str, issued: IssuedTokens) -> AuthResponse:
    return AuthResponse(
        message=message,
        user=UserOut.model_validate(issued.user),
        access_token=issued.access_token,
        refresh_token=issued.refresh_token,
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account and return a token pair",
    responses=_AUTH_ERRORS,
)
async def register(
    session: SessionDep,
    settings: SettingsDep,
    payload: RegisterRequest = Body(...),
) -> AuthResponse:
    service = AuthService(session=session, settings=settings)
    issued = await service.register(
        email=payload.email,
        password=payload.password.get_secret_value(),
        name=payload.name,
    )
    return _auth_response("User registered successfully", issued)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Exchange credentials for a token pair",
    responses=_AUTH_ERRORS,
)
async def login(
    session: SessionDep,
    settings: SettingsDep,
    payload: LoginRequest = Body(...),
) -> AuthResponse:
    service = AuthService(session=session, settings=settings)
    issued = await service.login(
        email=payload.email, password=payload.password.get_secret_value()
    )
    return _auth_response("Login successful", issued)


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    summary="Exchange a refresh token for a new access token",
    responses=_AUTH_ERRORS,
)
async def refresh(
    session: SessionDep,
    settings: SettingsDep,
    payload: RefreshRequest = Body(...),
) -> RefreshResponse:
    service = AuthService(session=session, settings=settings)
    access_token = await service.refresh(payload.refresh_token)
    return RefreshResponse(access_token=access_token)


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Return the authenticated user",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorMessage}},
)
async def read_me(user: CurrentUser) -> MeResponse:
    return MeResponse(user=UserOut.model_validate(user))
