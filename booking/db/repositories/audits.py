"""
Audit log repository functions.

Implements create and query functions for audit logs.
"""
from __future__ import annotations

import uuid
from typing import Optional
from sqlalchemy.orm import Session

from booking.db import schemas, models


def create_audit_log(
    db: Session,
    audit_log: schemas.AuditLogCreate,
    actor_user_id: Optional[uuid.UUID],
    company_id: Optional[uuid.UUID] = None,
    vendor_id: Optional[uuid.UUID] = None,
    *,
    commit: bool = True,
):
    data = audit_log.model_dump()
    metadata_payload = data.pop('metadata', None)
    db_audit_log = models.AuditLog(
        **data,
        actor_user_id=actor_user_id,
        company_id=company_id,
        vendor_id=vendor_id,
        metadata_json=metadata_payload,
    )
    db.add(db_audit_log)
    if commit:
        db.commit()
        db.refresh(db_audit_log)
    else:
        db.flush()
    return db_audit_log


def get_audit_logs(
    db: Session,
    *,
    target_type: Optional[str] = None,
    target_id: Optional[uuid.UUID] = None,
    user_id: Optional[uuid.UUID] = None,
    action_type: Optional[str] = None,
    status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
):
    query = db.query(models.AuditLog)
    if target_type:
        query = query.filter(models.AuditLog.target_type == target_type)
    if target_id:
        query = query.filter(models.AuditLog.target_id == target_id)
    if user_id:
        query = query.filter(models.AuditLog.actor_user_id == user_id)
    if action_type:
        query = query.filter(models.AuditLog.action_type == action_type)
    if status:
        query = query.filter(models.AuditLog.status == status)
    return query.order_by(models.AuditLog.created_at.desc()).offset(skip).limit(limit).all()
