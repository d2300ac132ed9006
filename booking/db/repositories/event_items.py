"""
Event item repository functions.

Implements create and listing queries, plus the approved-event lookup used
to flag items that can no longer be booked.
"""
from __future__ import annotations

import uuid
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session, joinedload

from booking.db import models, schemas
from booking.utils.roles import STATUS_APPROVED


def create_event_item(db: Session, event_item: schemas.EventItemCreate, *, vendor_id: uuid.UUID) -> models.EventItem:
    db_item = models.EventItem(**event_item.model_dump(), vendor_id=vendor_id)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def get_event_item(db: Session, event_item_id: uuid.UUID) -> Optional[models.EventItem]:
    return (
        db.query(models.EventItem)
        .options(joinedload(models.EventItem.vendor))
        .filter(models.EventItem.id == event_item_id)
        .first()
    )


def get_event_items(db: Session, skip: int = 0, limit: Optional[int] = None) -> List[models.EventItem]:
    """Return items newest first; every item unless `limit` is given."""
    query = (
        db.query(models.EventItem)
        .options(joinedload(models.EventItem.vendor))
        .order_by(models.EventItem.created_at.desc())
        .offset(skip)
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_event_items_by_vendor(db: Session, vendor_id: uuid.UUID) -> List[models.EventItem]:
    return (
        db.query(models.EventItem)
        .options(joinedload(models.EventItem.vendor))
        .filter(models.EventItem.vendor_id == vendor_id)
        .order_by(models.EventItem.created_at.desc())
        .all()
    )


def get_item_ids_with_approved_event(db: Session, event_item_ids: Iterable[uuid.UUID]) -> Set[uuid.UUID]:
    ids = list(event_item_ids)
    if not ids:
        return set()
    rows = (
        db.query(models.Event.event_item_id)
        .filter(
            models.Event.event_item_id.in_(ids),
            models.Event.status == STATUS_APPROVED,
        )
        .distinct()
        .all()
    )
    return {row[0] for row in rows}
