"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes so callers can import from
`booking.db.models` without knowing the module layout.
"""

from .base import Base, now_utc  # re-export

from .companies import Company
from .vendors import Vendor
from .users import User
from .event_items import EventItem
from .events import Event
from .tokens import RevokedToken
from .audit import AuditLog

__all__ = [
    "Base",
    "now_utc",
    # tenants
    "Company",
    "Vendor",
    "User",
    # catalogue/workflow
    "EventItem",
    "Event",
    # auth/audit
    "RevokedToken",
    "AuditLog",
]
