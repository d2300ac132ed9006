"""
Repositories for revoked JWT ids.

Implements revoke, lookup and purge of expired rows.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from booking.db import models


def _now() -> datetime:
    return datetime.now(timezone.utc)


def revoke_token(
    db: Session,
    *,
    jti: str,
    user_id: uuid.UUID,
    token_type: str,
    expires_at: datetime,
    commit: bool = True,
) -> models.RevokedToken:
    """Record `jti` as revoked. Revoking twice returns the existing row."""
    existing = db.get(models.RevokedToken, jti)
    if existing is not None:
        return existing
    row = models.RevokedToken(
        jti=jti,
        user_id=user_id,
        token_type=token_type,
        expires_at=expires_at,
        revoked_at=_now(),
    )
    db.add(row)
    if commit:
        db.commit()
    else:
        db.flush()
    return row


def is_revoked(db: Session, jti: str) -> bool:
    return db.get(models.RevokedToken, jti) is not None


def purge_expired(db: Session, *, now: datetime | None = None, commit: bool = True) -> int:
    cutoff = now or _now()
    deleted = (
        db.query(models.RevokedToken)
        .filter(models.RevokedToken.expires_at < cutoff)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return deleted
