"""
Authentication service: credential checks, JWT issuance, refresh rotation
and revocation.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from booking.config import Settings, get_settings
from booking.db import models, schemas
from booking.db.repositories import tokens as token_repo
from booking.db.repositories import users as user_repo
from booking.utils import token_crypto
from booking.services.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid refresh token"


@dataclass(frozen=True)
class AuthenticatedToken:
    """A verified access token and the user it resolved to."""
    user: models.User
    claims: Dict[str, Any]


def _build_claims(user: models.User, token_type: str) -> Dict[str, Any]:
    return {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "company_id": str(user.company_id) if user.company_id else None,
        "vendor_id": str(user.vendor_id) if user.vendor_id else None,
        "type": token_type,
    }


class AuthService:
    """Service class for login, token verification and logout."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def authenticate(self, username: str, password: str) -> models.User:
        """Return the user for valid credentials.

        Unknown users and wrong passwords raise the same error so callers
        cannot tell which usernames exist.
        """
        user = user_repo.get_user_by_username(self.db, (username or "").strip())
        if user is None or not token_crypto.verify_password(password, user.password_hash):
            logger.warning("login_failed username=%s", username)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if token_crypto.password_needs_rehash(user.password_hash):
            user_repo.update_password_hash(self.db, user, token_crypto.hash_password(password))
        return user

    def issue_tokens(self, user: models.User) -> schemas.TokenPair:
        access_token = token_crypto.encode_token(
            _build_claims(user, TOKEN_TYPE_ACCESS),
            secret=self.settings.jwt_secret,
            expires_in=self.settings.access_token_ttl,
        )
        refresh_token = token_crypto.encode_token(
            _build_claims(user, TOKEN_TYPE_REFRESH),
            secret=self.settings.jwt_refresh_secret,
            expires_in=self.settings.refresh_token_ttl,
        )
        return schemas.TokenPair(access_token=access_token, refresh_token=refresh_token)

    def login(self, username: str, password: str) -> Tuple[models.User, schemas.TokenPair]:
        user = self.authenticate(username, password)
        tokens = self.issue_tokens(user)
        logger.info("login_succeeded user_id=%s role=%s", user.id, user.role)
        return user, tokens

    def _load_user(self, claims: Dict[str, Any]) -> Optional[models.User]:
        try:
            user_id = uuid.UUID(str(claims.get("sub")))
        except ValueError:
            return None
        return user_repo.get_user(self.db, user_id)

    def _verify(self, token: str, *, secret: str, expected_type: str, error_message: str) -> Tuple[models.User, Dict[str, Any]]:
        try:
            claims = token_crypto.decode_token(token, secret=secret)
        except token_crypto.TokenError as exc:
            logger.info("token_rejected type=%s reason=%s", expected_type, exc)
            raise AuthenticationError(error_message) from exc
        if claims.get("type") != expected_type or not claims.get("jti"):
            raise AuthenticationError(error_message)
        if token_repo.is_revoked(self.db, claims["jti"]):
            logger.info("token_rejected type=%s reason=revoked jti=%s", expected_type, claims["jti"])
            raise AuthenticationError(error_message)
        user = self._load_user(claims)
        if user is None:
            raise AuthenticationError(error_message)
        return user, claims

    def verify_access_token(self, token: str) -> AuthenticatedToken:
        """Resolve a bearer token to its user.

        Role and tenant ids come from the database row, never from the claims.
        """
        user, claims = self._verify(
            token,
            secret=self.settings.jwt_secret,
            expected_type=TOKEN_TYPE_ACCESS,
            error_message="Invalid or expired token",
        )
        return AuthenticatedToken(user=user, claims=claims)

    def refresh(self, refresh_token: str) -> Tuple[models.User, schemas.TokenPair]:
        """Exchange a refresh token for a new pair, revoking the presented one."""
        user, claims = self._verify(
            refresh_token,
            secret=self.settings.jwt_refresh_secret,
            expected_type=TOKEN_TYPE_REFRESH,
            error_message=INVALID_REFRESH_TOKEN,
        )
        token_repo.revoke_token(
            self.db,
            jti=claims["jti"],
            user_id=user.id,
            token_type=TOKEN_TYPE_REFRESH,
            expires_at=token_crypto.expiry_from_claims(claims),
        )
        return user, self.issue_tokens(user)

    def logout(self, authenticated: AuthenticatedToken, refresh_token: Optional[str] = None) -> None:
        """Revoke the access token and, when given, the caller's refresh token."""
        claims = authenticated.claims
        token_repo.revoke_token(
            self.db,
            jti=claims["jti"],
            user_id=authenticated.user.id,
            token_type=TOKEN_TYPE_ACCESS,
            expires_at=token_crypto.expiry_from_claims(claims),
            commit=False,
        )
        if refresh_token:
            try:
                refresh_claims = token_crypto.decode_token(refresh_token, secret=self.settings.jwt_refresh_secret)
            except token_crypto.TokenError as exc:
                # Already unusable; nothing to revoke
                logger.info("logout_refresh_ignored user_id=%s reason=%s", authenticated.user.id, exc)
                refresh_claims = None
            if (
                refresh_claims
                and refresh_claims.get("type") == TOKEN_TYPE_REFRESH
                and refresh_claims.get("sub") == str(authenticated.user.id)
                and refresh_claims.get("jti")
            ):
                token_repo.revoke_token(
                    self.db,
                    jti=refresh_claims["jti"],
                    user_id=authenticated.user.id,
                    token_type=TOKEN_TYPE_REFRESH,
                    expires_at=token_crypto.expiry_from_claims(refresh_claims),
                    commit=False,
                )
        purged = token_repo.purge_expired(self.db, commit=False)
        self.db.commit()
        logger.info("logout user_id=%s purged_revocations=%s", authenticated.user.id, purged)
