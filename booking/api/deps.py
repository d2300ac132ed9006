"""
API dependency helpers.

Provides the authenticated user, role guards and service error translation
for routes.
"""
import logging
from typing import Callable, Optional

from fastapi import Cookie, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from booking.api.permissions import tenant_error
from booking.config import Settings, get_settings
from booking.db import models
from booking.db.database import get_db
from booking.services.auth_service import AuthenticatedToken, AuthService
from booking.services.errors import AuthenticationError, ServiceError
from booking.utils.roles import is_valid_role

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"


def to_http_exception(exc: ServiceError) -> HTTPException:
    """Translate a service-layer error into the HTTPException a route raises."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return HTTPException(status_code=exc.status_code, detail=exc.message, headers=headers)


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, settings)


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


# Contract:
# Returns the verified access token with its user.
# Raises 401 if no valid, unrevoked access token is presented.

def get_authenticated_token(
    authorization: Optional[str] = Header(default=None),
    session: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticatedToken:
    token = _extract_bearer(authorization) or session
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return auth_service.verify_access_token(token)
    except AuthenticationError as exc:
        raise to_http_exception(exc) from exc


def get_current_user(
    authenticated: AuthenticatedToken = Depends(get_authenticated_token),
) -> models.User:
    user = authenticated.user
    if not is_valid_role(user.role):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
    reason = tenant_error(user)
    if reason:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=reason)
    return user


def require_role(*roles: str) -> Callable[..., models.User]:
    """Dependency factory admitting only users whose role is in ``roles``."""
    allowed = frozenset(roles)

    def _guard(user: models.User = Depends(get_current_user)) -> models.User:
        if user.role not in allowed:
            logger.warning("role_denied user_id=%s role=%s required=%s", user.id, user.role, sorted(allowed))
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user

    return _guard
