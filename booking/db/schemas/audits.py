import uuid
from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AuditLogBase(BaseModel):
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[uuid.UUID] = None
    metadata: Optional[Dict[str, Any]] = None


class AuditLogCreate(AuditLogBase):
    pass


class AuditLog(AuditLogBase):
    id: uuid.UUID
    actor_user_id: Optional[uuid.UUID] = None
    company_id: Optional[uuid.UUID] = None
    vendor_id: Optional[uuid.UUID] = None
    created_at: datetime
    # ORM rows expose the column as `metadata_json`
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("metadata_json", "metadata")
    )
    model_config = ConfigDict(from_attributes=True)
