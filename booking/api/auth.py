"""
Authentication API endpoints.

Issues JWT access/refresh pairs, rotates refresh tokens and revokes tokens
on logout. The access token is also set as an HTTP-only session cookie for
browser clients.
"""
from fastapi import APIRouter, Depends, Response, status

from booking.api.deps import (
    SESSION_COOKIE,
    get_auth_service,
    get_authenticated_token,
    get_current_user,
    to_http_exception,
)
from booking.audit import TARGET_USER, AuditAction, log as audit_log
from booking.config import Settings, get_settings
from booking.db import models, schemas
from booking.services.auth_service import AuthenticatedToken, AuthService
from booking.services.errors import AuthenticationError

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, access_token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=access_token,
        max_age=int(settings.access_token_ttl.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def _login_response(user: models.User, tokens: schemas.TokenPair) -> schemas.LoginResponse:
    return schemas.LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        user=schemas.UserProfile.model_validate(user),
    )


@router.post("/login", response_model=schemas.LoginResponse)
def login(
    payload: schemas.LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    try:
        user, tokens = auth_service.login(payload.username, payload.password)
    except AuthenticationError as exc:
        raise to_http_exception(exc) from exc
    audit_log(
        auth_service.db,
        action=AuditAction.USER_LOGIN,
        target_type=TARGET_USER,
        target_id=user.id,
        actor_user_id=user.id,
        company_id=user.company_id,
        vendor_id=user.vendor_id,
    )
    _set_session_cookie(response, tokens.access_token, settings)
    return _login_response(user, tokens)


@router.post("/refresh", response_model=schemas.LoginResponse)
def refresh(
    payload: schemas.RefreshRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    try:
        user, tokens = auth_service.refresh(payload.refresh_token)
    except AuthenticationError as exc:
        raise to_http_exception(exc) from exc
    _set_session_cookie(response, tokens.access_token, settings)
    return _login_response(user, tokens)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    payload: schemas.LogoutRequest | None = None,
    authenticated: AuthenticatedToken = Depends(get_authenticated_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    auth_service.logout(authenticated, refresh_token=payload.refresh_token if payload else None)
    audit_log(
        auth_service.db,
        action=AuditAction.USER_LOGOUT,
        target_type=TARGET_USER,
        target_id=authenticated.user.id,
        actor_user_id=authenticated.user.id,
        company_id=authenticated.user.company_id,
        vendor_id=authenticated.user.vendor_id,
    )
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(SESSION_COOKIE, path="/")
    return response


@router.get("/me", response_model=schemas.UserProfile)
def me(user: models.User = Depends(get_current_user)):
    return user
