import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .vendors import VendorSummary


class EventItemSummary(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class EventItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class EventItem(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    vendor_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class EventItemWithStatus(EventItem):
    vendor: Optional[VendorSummary] = None
    has_approved_event: bool = False
