"""
Password hashing and JWT signing utilities.

Responsibilities:
- Hash passwords using Argon2id and verify them against stored hashes
- Sign HS256 JWTs carrying a unique `jti`, an `iat` and an `exp`
- Decode and verify JWTs, mapping library errors to `TokenError`
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type
from jose import ExpiredSignatureError, JWTError, jwt

JWT_ALGORITHM = "HS256"

_argon2 = PasswordHasher(time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID)


class TokenError(Exception):
    """Raised when a JWT cannot be decoded or fails verification."""

    def __init__(self, message: str, *, expired: bool = False):
        super().__init__(message)
        self.expired = expired


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def password_needs_rehash(encoded_hash: str) -> bool:
    return _argon2.check_needs_rehash(encoded_hash)


def generate_jti() -> str:
    """Return a unique token identifier used for revocation lookups."""
    return uuid.uuid4().hex


def encode_token(
    claims: Dict[str, Any],
    *,
    secret: str,
    expires_in: timedelta,
    now: Optional[datetime] = None,
) -> str:
    """Sign `claims` into an HS256 JWT, adding `jti`, `iat` and `exp`.

    A `jti` already present in `claims` is kept.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload.setdefault("jti", generate_jti())
    payload["iat"] = int(issued_at.timestamp())
    payload["exp"] = int((issued_at + expires_in).timestamp())
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, *, secret: str) -> Dict[str, Any]:
    """Verify the signature and expiry of `token` and return its claims.

    Raises:
        TokenError: If the token is malformed, expired or signed with another key
    """
    if not token:
        raise TokenError("Token is empty")
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenError("Token has expired", expired=True) from exc
    except JWTError as exc:
        raise TokenError(f"Invalid token: {exc}") from exc


def expiry_from_claims(claims: Dict[str, Any]) -> datetime:
    """Return the `exp` claim as an aware UTC datetime."""
    return datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)
