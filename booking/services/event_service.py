"""
Event workflow service: request, edit, approve and reject events.

Approval is transactional: the approved event and the automatic rejection
of every other pending request for the same event item are committed
together or not at all.
"""

import logging
import uuid
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from booking.api.permissions import can_access_event, owns_event_item
from booking.audit import TARGET_EVENT, AuditAction, log_event
from booking.db import models, schemas
from booking.db.repositories import audits as audit_repo
from booking.db.repositories import event_items as item_repo
from booking.db.repositories import events as event_repo
from booking.services.errors import ForbiddenError, InvalidStateError, NotFoundError, ValidationFailedError
from booking.utils.dates import to_calendar_day
from booking.utils.roles import (
    ROLE_HR_ADMIN,
    ROLE_VENDOR_ADMIN,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
    can_transition,
)

logger = logging.getLogger(__name__)

AUTO_REJECT_REMARKS = "Automatically rejected: Another event for this event item has been approved"
APPROVED_EVENT_EXISTS = "Cannot create event: An approved event already exists for this event item"


class EventService:
    """Service class for the event approval workflow."""

    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, event_id: uuid.UUID) -> models.Event:
        event = event_repo.get_event(self.db, event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def _reload(self, event: models.Event) -> models.Event:
        return event_repo.get_event(self.db, event.id)

    def list_events(self, user: models.User) -> List[models.Event]:
        """Return the caller's tenant events, newest first."""
        if user.role == ROLE_HR_ADMIN:
            return event_repo.get_events_by_company(self.db, user.company_id)
        if user.role == ROLE_VENDOR_ADMIN:
            return event_repo.get_events_by_vendor(self.db, user.vendor_id)
        return []

    def get_event(self, user: models.User, event_id: uuid.UUID) -> models.Event:
        event = self._get_or_404(event_id)
        if not can_access_event(event, user):
            raise ForbiddenError("Not authorized to access this event")
        return event

    def create_event(self, user: models.User, payload: schemas.EventCreate) -> models.Event:
        item = item_repo.get_event_item(self.db, payload.event_item_id)
        if item is None:
            raise NotFoundError("Event item not found")
        if event_repo.has_approved_event_for_item(self.db, item.id):
            raise InvalidStateError(APPROVED_EVENT_EXISTS)

        try:
            event = event_repo.create_event(
                self.db,
                company_id=user.company_id,
                event_item_id=item.id,
                vendor_id=item.vendor_id,
                proposed_dates=payload.proposed_dates,
                postal_code=payload.location.postal_code,
                street_name=payload.location.street_name,
                commit=False,
            )
            log_event(
                self.db,
                actor_user_id=user.id,
                event=event,
                action=AuditAction.EVENT_CREATE,
                metadata={
                    "event_item_id": str(item.id),
                    "proposed_dates": [d.isoformat() for d in payload.proposed_dates],
                },
                commit=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("event_created event_id=%s company_id=%s event_item_id=%s", event.id, user.company_id, item.id)
        return self._reload(event)

    def update_event(self, user: models.User, event_id: uuid.UUID, payload: schemas.EventUpdate) -> models.Event:
        event = self._get_or_404(event_id)
        if user.role != ROLE_HR_ADMIN or event.company_id != user.company_id:
            raise ForbiddenError("Not authorized to update this event")
        if event.status != STATUS_PENDING:
            raise InvalidStateError(
                f"Cannot edit event with status {event.status}. Only pending events can be edited."
            )

        changes = {}
        if payload.proposed_dates is not None:
            changes["proposed_dates"] = payload.proposed_dates
        if payload.location is not None:
            changes["location_postal_code"] = payload.location.postal_code
            changes["location_street_name"] = payload.location.street_name
        if not changes:
            return event

        try:
            event_repo.update_event(self.db, event, changes, commit=False)
            log_event(
                self.db,
                actor_user_id=user.id,
                event=event,
                action=AuditAction.EVENT_UPDATE,
                metadata={"fields": sorted(payload.model_dump(exclude_none=True).keys())},
                commit=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self._reload(event)

    def approve_event(self, user: models.User, event_id: uuid.UUID, confirmed_date: date) -> models.Event:
        """Approve an event on one of its proposed days.

        Every other pending event for the same event item is rejected in the
        same transaction.
        """
        event = self._get_or_404(event_id)
        if user.vendor_id is None or event.vendor_id != user.vendor_id:
            raise ForbiddenError("Not authorized to approve this event")
        if not can_transition(event.status, STATUS_APPROVED):
            raise InvalidStateError("Only pending events can be approved")

        confirmed_day = to_calendar_day(confirmed_date)
        proposed_days = {to_calendar_day(value) for value in event.proposed_dates or []}
        if confirmed_day not in proposed_days:
            raise ValidationFailedError("Confirmed date must be one of the proposed dates")

        try:
            event_repo.update_event(
                self.db,
                event,
                {"status": STATUS_APPROVED, "confirmed_date": confirmed_day},
                commit=False,
            )
            siblings = event_repo.get_pending_events_for_item(
                self.db, event.event_item_id, exclude_event_id=event.id
            )
            event_repo.reject_events(self.db, siblings, remarks=AUTO_REJECT_REMARKS)
            log_event(
                self.db,
                actor_user_id=user.id,
                event=event,
                action=AuditAction.EVENT_APPROVE,
                metadata={
                    "confirmed_date": confirmed_day.isoformat(),
                    "auto_rejected_event_ids": [str(s.id) for s in siblings],
                },
                commit=False,
            )
            for sibling in siblings:
                log_event(
                    self.db,
                    actor_user_id=user.id,
                    event=sibling,
                    action=AuditAction.EVENT_AUTO_REJECT,
                    metadata={"approved_event_id": str(event.id), "remarks": AUTO_REJECT_REMARKS},
                    commit=False,
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("event_approve_failed event_id=%s", event_id)
            raise

        logger.info(
            "event_approved event_id=%s confirmed_date=%s auto_rejected=%d",
            event.id,
            confirmed_day.isoformat(),
            len(siblings),
        )
        return self._reload(event)

    def reject_event(self, user: models.User, event_id: uuid.UUID, remarks: str) -> models.Event:
        event = self._get_or_404(event_id)
        if user.vendor_id is None or event.vendor_id != user.vendor_id:
            raise ForbiddenError("Not authorized to reject this event")
        if not can_transition(event.status, STATUS_REJECTED):
            raise InvalidStateError("Only pending events can be rejected")

        cleaned = remarks.strip()
        try:
            event_repo.update_event(
                self.db,
                event,
                {"status": STATUS_REJECTED, "remarks": cleaned},
                commit=False,
            )
            log_event(
                self.db,
                actor_user_id=user.id,
                event=event,
                action=AuditAction.EVENT_REJECT,
                metadata={"remarks": cleaned},
                commit=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("event_rejected event_id=%s", event.id)
        return self._reload(event)

    def list_events_for_item(self, user: models.User, event_item_id: uuid.UUID) -> List[models.Event]:
        item = item_repo.get_event_item(self.db, event_item_id)
        if item is None:
            raise NotFoundError("Event item not found")
        if not owns_event_item(item, user):
            raise ForbiddenError("Not authorized to access this event item")
        return event_repo.get_events_by_event_item(self.db, item.id)

    def get_event_history(self, user: models.User, event_id: uuid.UUID, *, skip: int = 0, limit: int = 100):
        """Audit entries for one visible event, newest first."""
        event = self.get_event(user, event_id)
        return audit_repo.get_audit_logs(
            self.db, target_type=TARGET_EVENT, target_id=event.id, skip=skip, limit=limit
        )
