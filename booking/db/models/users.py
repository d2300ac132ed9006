import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, CheckConstraint, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(50), nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(20), nullable=False)  # 'HR_ADMIN'|'VENDOR_ADMIN'
    company_id = Column(UUID(as_uuid=True), ForeignKey('companies.id', ondelete='CASCADE'), nullable=True)
    vendor_id = Column(UUID(as_uuid=True), ForeignKey('vendors.id', ondelete='CASCADE'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    company = relationship("Company", back_populates="users")
    vendor = relationship("Vendor", back_populates="users")

    __table_args__ = (
        Index('ix_users_username', 'username', unique=True),
        CheckConstraint("role in ('HR_ADMIN','VENDOR_ADMIN')", name='ck_users_role'),
        CheckConstraint(
            "(role = 'HR_ADMIN' AND company_id IS NOT NULL AND vendor_id IS NULL) OR "
            "(role = 'VENDOR_ADMIN' AND vendor_id IS NOT NULL AND company_id IS NULL)",
            name='ck_users_tenant',
        ),
    )
