import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class EventItem(Base):
    __tablename__ = 'event_items'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    vendor_id = Column(UUID(as_uuid=True), ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    vendor = relationship("Vendor", back_populates="event_items")
    events = relationship("Event", back_populates="event_item")

    __table_args__ = (
        Index('ix_event_items_vendor_id_created_at', 'vendor_id', 'created_at'),
    )
