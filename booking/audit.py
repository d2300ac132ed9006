"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes a convenience wrapper for event workflow entries.
"""
from __future__ import annotations
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from booking.db import schemas
from booking.db.repositories import audits as repo_audits


class AuditAction(str, Enum):
    # Event workflow
    EVENT_CREATE = "event_create"
    EVENT_UPDATE = "event_update"
    EVENT_APPROVE = "event_approve"
    EVENT_AUTO_REJECT = "event_auto_reject"
    EVENT_REJECT = "event_reject"
    # Event items
    EVENT_ITEM_CREATE = "event_item_create"
    # Authentication
    USER_LOGIN = "user_login"
    USER_LOGOUT = "user_logout"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


TARGET_EVENT = "event"
TARGET_EVENT_ITEM = "event_item"
TARGET_USER = "user"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: Optional[uuid.UUID],
    company_id: Optional[uuid.UUID] = None,
    vendor_id: Optional[uuid.UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
    commit: bool = True,
):
    """Central audit logging helper.

    Pass ``commit=False`` to write the entry inside the caller's transaction.
    """
    # Persist pure string values, not Enum reprs (avoid 'AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return repo_audits.create_audit_log(
        db,
        audit_log,
        actor_user_id,
        company_id,
        vendor_id,
        commit=commit,
    )


def log_event(
    db: Session,
    *,
    actor_user_id: Optional[uuid.UUID],
    event,
    action: AuditAction,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    metadata: Optional[Dict[str, Any]] = None,
    commit: bool = True,
):
    """Log an event workflow action, tagging both tenants of the event."""
    return log(
        db,
        action=action,
        status=status,
        target_type=TARGET_EVENT,
        target_id=event.id,
        actor_user_id=actor_user_id,
        company_id=event.company_id,
        vendor_id=event.vendor_id,
        metadata=metadata,
        commit=commit,
    )


__all__ = ["AuditAction", "AuditStatus", "log", "log_event", "TARGET_EVENT", "TARGET_EVENT_ITEM", "TARGET_USER"]
