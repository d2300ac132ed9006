"""
Event repository functions.

Queries eager-load the event item, company and vendor so response schemas
can embed them without extra round trips.
"""
from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from booking.db import models
from booking.utils.roles import STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED


def _with_relations(query):
    return query.options(
        joinedload(models.Event.event_item),
        joinedload(models.Event.company),
        joinedload(models.Event.vendor),
    )


def _serialize_dates(days: List[date]) -> List[str]:
    return [d.isoformat() for d in days]


def create_event(
    db: Session,
    *,
    company_id: uuid.UUID,
    event_item_id: uuid.UUID,
    vendor_id: uuid.UUID,
    proposed_dates: List[date],
    postal_code: str,
    street_name: str,
    commit: bool = True,
) -> models.Event:
    db_event = models.Event(
        company_id=company_id,
        event_item_id=event_item_id,
        vendor_id=vendor_id,
        proposed_dates=_serialize_dates(proposed_dates),
        location_postal_code=postal_code,
        location_street_name=street_name,
        status=STATUS_PENDING,
    )
    db.add(db_event)
    if commit:
        db.commit()
        db.refresh(db_event)
    else:
        db.flush()
    return db_event


def get_event(db: Session, event_id: uuid.UUID) -> Optional[models.Event]:
    return _with_relations(db.query(models.Event)).filter(models.Event.id == event_id).first()


def get_events_by_company(db: Session, company_id: uuid.UUID) -> List[models.Event]:
    return (
        _with_relations(db.query(models.Event))
        .filter(models.Event.company_id == company_id)
        .order_by(models.Event.date_created.desc())
        .all()
    )


def get_events_by_vendor(db: Session, vendor_id: uuid.UUID) -> List[models.Event]:
    return (
        _with_relations(db.query(models.Event))
        .filter(models.Event.vendor_id == vendor_id)
        .order_by(models.Event.date_created.desc())
        .all()
    )


def get_events_by_event_item(db: Session, event_item_id: uuid.UUID) -> List[models.Event]:
    return (
        _with_relations(db.query(models.Event))
        .filter(models.Event.event_item_id == event_item_id)
        .order_by(models.Event.date_created.desc())
        .all()
    )


def get_pending_events_for_item(
    db: Session, event_item_id: uuid.UUID, *, exclude_event_id: Optional[uuid.UUID] = None
) -> List[models.Event]:
    query = db.query(models.Event).filter(
        models.Event.event_item_id == event_item_id,
        models.Event.status == STATUS_PENDING,
    )
    if exclude_event_id is not None:
        query = query.filter(models.Event.id != exclude_event_id)
    return query.all()


def has_approved_event_for_item(db: Session, event_item_id: uuid.UUID) -> bool:
    return (
        db.query(models.Event.id)
        .filter(
            models.Event.event_item_id == event_item_id,
            models.Event.status == STATUS_APPROVED,
        )
        .first()
        is not None
    )


def update_event(db: Session, event: models.Event, changes: Dict[str, Any], *, commit: bool = True) -> models.Event:
    """Apply column changes; ``proposed_dates`` may be given as date objects."""
    for key, value in changes.items():
        if key == "proposed_dates" and value is not None:
            value = _serialize_dates(value)
        setattr(event, key, value)
    if commit:
        db.commit()
        db.refresh(event)
    else:
        db.flush()
    return event


def reject_events(db: Session, events: List[models.Event], *, remarks: str) -> None:
    """Stage a status change to Rejected for every given event (no commit)."""
    for event in events:
        event.status = STATUS_REJECTED
        event.remarks = remarks
    db.flush()
