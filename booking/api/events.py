"""
Event workflow API endpoints.

HR admins request events for their company; vendor admins approve or reject
the requests addressed to their vendor.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from booking.api.deps import get_current_user, require_role, to_http_exception
from booking.db import models, schemas
from booking.db.database import get_db
from booking.services.errors import ServiceError
from booking.services.event_service import EventService
from booking.utils.roles import ROLE_HR_ADMIN, ROLE_VENDOR_ADMIN

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(db: Session = Depends(get_db)) -> EventService:
    return EventService(db)


@router.get("", response_model=List[schemas.Event])
def list_events(
    user: models.User = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    return service.list_events(user)


@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: schemas.EventCreate,
    user: models.User = Depends(require_role(ROLE_HR_ADMIN)),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.create_event(user, payload)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.get("/event-item/{event_item_id}", response_model=List[schemas.Event])
def list_events_for_event_item(
    event_item_id: uuid.UUID,
    user: models.User = Depends(require_role(ROLE_VENDOR_ADMIN)),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.list_events_for_item(user, event_item_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{event_id}", response_model=schemas.Event)
def get_event(
    event_id: uuid.UUID,
    user: models.User = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.get_event(user, event_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.put("/{event_id}", response_model=schemas.Event)
def update_event(
    event_id: uuid.UUID,
    payload: schemas.EventUpdate,
    user: models.User = Depends(require_role(ROLE_HR_ADMIN)),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.update_event(user, event_id, payload)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{event_id}/approve", response_model=schemas.Event)
def approve_event(
    event_id: uuid.UUID,
    payload: schemas.EventApprove,
    user: models.User = Depends(require_role(ROLE_VENDOR_ADMIN)),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.approve_event(user, event_id, payload.confirmed_date)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{event_id}/reject", response_model=schemas.Event)
def reject_event(
    event_id: uuid.UUID,
    payload: schemas.EventReject,
    user: models.User = Depends(require_role(ROLE_VENDOR_ADMIN)),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.reject_event(user, event_id, payload.remarks)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{event_id}/history", response_model=List[schemas.AuditLog])
def get_event_history(
    event_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    user: models.User = Depends(get_current_user),
    service: EventService = Depends(get_event_service),
):
    try:
        return service.get_event_history(user, event_id, skip=skip, limit=limit)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
