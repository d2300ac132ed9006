from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class RevokedToken(Base):
    """A JWT id that may no longer authenticate (logout or refresh rotation)."""
    __tablename__ = 'revoked_tokens'

    jti = Column(String(64), primary_key=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    token_type = Column(String(10), nullable=False)  # access|refresh
    # Rows past expires_at can be purged; the token would fail verification anyway
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_revoked_tokens_user_id', 'user_id'),
        Index('idx_revoked_tokens_expires_at', 'expires_at'),
    )
