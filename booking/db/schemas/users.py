import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from booking.utils.roles import UserRole, validate_tenant_assignment


class UserBase(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    role: UserRole
    company_id: Optional[uuid.UUID] = None
    vendor_id: Optional[uuid.UUID] = None

    @field_validator("username", mode="before")
    @classmethod
    def _strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserCreate(UserBase):
    password: str = Field(min_length=6)

    @model_validator(mode="after")
    def _check_tenant(self):
        validate_tenant_assignment(self.role.value, self.company_id, self.vendor_id)
        return self

class UserProfile(BaseModel):
    id: uuid.UUID
    username: str
    role: str
    company_id: Optional[uuid.UUID] = None
    vendor_id: Optional[uuid.UUID] = None
    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    username: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class LogoutRequest(BaseModel):
    refresh_token: Optional[str] = None


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginResponse(TokenPair):
    user: UserProfile
