"""
Domain-split Pydantic schemas.

Re-exports every request/response model so callers can use
`booking.db.schemas.<Name>` without knowing the module layout.
"""

# Import order: summaries first to satisfy nested references
from .companies import CompanySummary, CompanyBase, CompanyCreate
from .vendors import VendorSummary, VendorBase, VendorCreate
from .users import (
    UserBase,
    UserCreate,
    UserProfile,
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    TokenPair,
    LoginResponse,
)
from .event_items import EventItemSummary, EventItemCreate, EventItem, EventItemWithStatus
from .events import (
    PROPOSED_DATE_COUNT,
    Location,
    EventCreate,
    EventUpdate,
    EventApprove,
    EventReject,
    Event,
)
from .location import PostalCodeLookup
from .audits import AuditLogBase, AuditLogCreate, AuditLog

__all__ = [
    "CompanySummary",
    "CompanyBase",
    "CompanyCreate",
    "VendorSummary",
    "VendorBase",
    "VendorCreate",
    "UserBase",
    "UserCreate",
    "UserProfile",
    "LoginRequest",
    "RefreshRequest",
    "LogoutRequest",
    "TokenPair",
    "LoginResponse",
    "EventItemSummary",
    "EventItemCreate",
    "EventItem",
    "EventItemWithStatus",
    "PROPOSED_DATE_COUNT",
    "Location",
    "EventCreate",
    "EventUpdate",
    "EventApprove",
    "EventReject",
    "Event",
    "PostalCodeLookup",
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
]
