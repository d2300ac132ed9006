import uuid
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from booking.utils.dates import find_duplicate_days, to_calendar_day
from booking.utils.roles import EventStatus
from .companies import CompanySummary
from .event_items import EventItemSummary
from .vendors import VendorSummary

PROPOSED_DATE_COUNT = 3


def _parse_proposed_dates(v):
    if not isinstance(v, (list, tuple)):
        raise ValueError("proposed_dates must be a list of dates")
    if len(v) != PROPOSED_DATE_COUNT:
        raise ValueError(f"Exactly {PROPOSED_DATE_COUNT} proposed dates are required")
    days = [to_calendar_day(item) for item in v]
    if find_duplicate_days(days):
        raise ValueError("Proposed dates must be unique")
    return days


class Location(BaseModel):
    postal_code: str
    street_name: str
    model_config = ConfigDict(from_attributes=True)

    @field_validator("postal_code", "street_name")
    @classmethod
    def _not_blank(cls, v: str, info):
        cleaned = v.strip()
        if not cleaned:
            raise ValueError(f"{info.field_name} is required")
        return cleaned


class EventCreate(BaseModel):
    event_item_id: uuid.UUID
    proposed_dates: List[date]
    location: Location

    @field_validator("proposed_dates", mode="before")
    @classmethod
    def _validate_dates(cls, v):
        return _parse_proposed_dates(v)


class EventUpdate(BaseModel):
    proposed_dates: Optional[List[date]] = None
    location: Optional[Location] = None

    @field_validator("proposed_dates", mode="before")
    @classmethod
    def _validate_dates(cls, v):
        if v is None:
            return v
        return _parse_proposed_dates(v)


class EventApprove(BaseModel):
    confirmed_date: date

    @field_validator("confirmed_date", mode="before")
    @classmethod
    def _to_day(cls, v):
        return to_calendar_day(v)


class EventReject(BaseModel):
    remarks: str

    @field_validator("remarks")
    @classmethod
    def _not_blank(cls, v: str):
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Remarks are required when rejecting an event")
        return cleaned


class Event(BaseModel):
    id: uuid.UUID
    company_id: uuid.UUID
    event_item_id: uuid.UUID
    vendor_id: uuid.UUID
    proposed_dates: List[date]
    location: Location
    status: EventStatus
    confirmed_date: Optional[date] = None
    remarks: Optional[str] = None
    date_created: datetime
    last_modified: datetime
    event_item: Optional[EventItemSummary] = None
    company: Optional[CompanySummary] = None
    vendor: Optional[VendorSummary] = None
    model_config = ConfigDict(from_attributes=True)
