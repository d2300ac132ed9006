import re
import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class VendorSummary(BaseModel):
    id: uuid.UUID
    name: str
    model_config = ConfigDict(from_attributes=True)


class VendorBase(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    description: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("contact_email")
    @classmethod
    def _validate_email(cls, v: Optional[str]):
        if v is None:
            return v
        cleaned = v.strip().lower()
        if not _EMAIL_RE.match(cleaned):
            raise ValueError("Please provide a valid email")
        return cleaned


class VendorCreate(VendorBase):
    pass
