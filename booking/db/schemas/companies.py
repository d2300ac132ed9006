import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanySummary(BaseModel):
    id: uuid.UUID
    name: str
    model_config = ConfigDict(from_attributes=True)


class CompanyBase(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class CompanyCreate(CompanyBase):
    pass
