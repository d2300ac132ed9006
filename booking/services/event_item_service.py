"""
Event item service: vendor catalogue management and browsing.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from booking.audit import TARGET_EVENT_ITEM, AuditAction, log as audit_log
from booking.db import models, schemas
from booking.db.repositories import event_items as item_repo

logger = logging.getLogger(__name__)


class EventItemService:
    """Service class for event item operations."""

    def __init__(self, db: Session):
        self.db = db

    def _with_status(self, items: List[models.EventItem]) -> List[schemas.EventItemWithStatus]:
        approved = item_repo.get_item_ids_with_approved_event(self.db, [item.id for item in items])
        results = []
        for item in items:
            entry = schemas.EventItemWithStatus.model_validate(item)
            entry.has_approved_event = item.id in approved
            results.append(entry)
        return results

    def list_event_items(self) -> List[schemas.EventItemWithStatus]:
        """All items with their vendor and whether an event is already approved."""
        return self._with_status(item_repo.get_event_items(self.db))

    def list_vendor_items(self, user: models.User) -> List[schemas.EventItemWithStatus]:
        return self._with_status(item_repo.get_event_items_by_vendor(self.db, user.vendor_id))

    def create_event_item(self, user: models.User, payload: schemas.EventItemCreate) -> models.EventItem:
        item = item_repo.create_event_item(self.db, payload, vendor_id=user.vendor_id)
        audit_log(
            self.db,
            action=AuditAction.EVENT_ITEM_CREATE,
            target_type=TARGET_EVENT_ITEM,
            target_id=item.id,
            actor_user_id=user.id,
            vendor_id=user.vendor_id,
            metadata={"name": item.name},
        )
        logger.info("event_item_created event_item_id=%s vendor_id=%s", item.id, user.vendor_id)
        return item
