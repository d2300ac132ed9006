import uuid
from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Index, CheckConstraint, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Event(Base):
    __tablename__ = 'events'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_id = Column(UUID(as_uuid=True), ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)
    event_item_id = Column(UUID(as_uuid=True), ForeignKey('event_items.id', ondelete='CASCADE'), nullable=False)
    # Denormalized from the event item at creation
    vendor_id = Column(UUID(as_uuid=True), ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    # Three ISO calendar days, e.g. ["2025-03-01", "2025-03-08", "2025-03-15"]
    proposed_dates = Column(JSONB, nullable=False)
    location_postal_code = Column(String(20), nullable=False)
    location_street_name = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default='Pending')  # Pending|Approved|Rejected
    confirmed_date = Column(Date, nullable=True)
    remarks = Column(Text, nullable=True)
    date_created = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    last_modified = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    company = relationship("Company", back_populates="events")
    event_item = relationship("EventItem", back_populates="events")
    vendor = relationship("Vendor")

    __table_args__ = (
        Index('ix_events_company_id_date_created', 'company_id', 'date_created'),
        Index('ix_events_vendor_id_date_created', 'vendor_id', 'date_created'),
        Index('ix_events_event_item_id_status', 'event_item_id', 'status'),
        CheckConstraint("status in ('Pending','Approved','Rejected')", name='ck_events_status'),
    )

    @property
    def location(self):
        return {
            "postal_code": self.location_postal_code,
            "street_name": self.location_street_name,
        }
