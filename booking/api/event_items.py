"""
Event item API endpoints.

Vendors publish wellness offerings; every authenticated user can browse
them together with a flag telling whether an event is already approved.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from booking.api.deps import get_current_user, require_role
from booking.db import models, schemas
from booking.db.database import get_db
from booking.services.event_item_service import EventItemService
from booking.utils.roles import ROLE_VENDOR_ADMIN

router = APIRouter(prefix="/event-items", tags=["event-items"])


def get_event_item_service(db: Session = Depends(get_db)) -> EventItemService:
    return EventItemService(db)


@router.get("", response_model=List[schemas.EventItemWithStatus])
def list_event_items(
    _user: models.User = Depends(get_current_user),
    service: EventItemService = Depends(get_event_item_service),
):
    return service.list_event_items()


@router.post("", response_model=schemas.EventItem, status_code=status.HTTP_201_CREATED)
def create_event_item(
    payload: schemas.EventItemCreate,
    user: models.User = Depends(require_role(ROLE_VENDOR_ADMIN)),
    service: EventItemService = Depends(get_event_item_service),
):
    return service.create_event_item(user, payload)


@router.get("/my-items", response_model=List[schemas.EventItemWithStatus])
def list_my_event_items(
    user: models.User = Depends(require_role(ROLE_VENDOR_ADMIN)),
    service: EventItemService = Depends(get_event_item_service),
):
    return service.list_vendor_items(user)
