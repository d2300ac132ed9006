"""
User role and event status constants.

Centralized definitions for the two administrator roles and the three-state
event lifecycle, so string literals are not scattered across the codebase.
"""

from typing import FrozenSet, Optional
from enum import Enum


ROLE_HR_ADMIN = "HR_ADMIN"
ROLE_VENDOR_ADMIN = "VENDOR_ADMIN"

ALL_ROLES: FrozenSet[str] = frozenset({ROLE_HR_ADMIN, ROLE_VENDOR_ADMIN})

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Approved"
STATUS_REJECTED = "Rejected"

ALL_STATUSES: FrozenSet[str] = frozenset({STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED})

# A Pending event may move to either terminal state; terminal states are final.
ALLOWED_TRANSITIONS = {
    STATUS_PENDING: frozenset({STATUS_APPROVED, STATUS_REJECTED}),
    STATUS_APPROVED: frozenset(),
    STATUS_REJECTED: frozenset(),
}


class UserRole(str, Enum):
    """Enum for user roles used in schemas and validation."""
    HR_ADMIN = ROLE_HR_ADMIN
    VENDOR_ADMIN = ROLE_VENDOR_ADMIN


class EventStatus(str, Enum):
    """Enum for event statuses used in schemas and validation."""
    PENDING = STATUS_PENDING
    APPROVED = STATUS_APPROVED
    REJECTED = STATUS_REJECTED


def is_valid_role(role: Optional[str]) -> bool:
    return role in ALL_ROLES


def can_transition(current: str, target: str) -> bool:
    """Return True if an event in `current` status may move to `target`."""
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def validate_tenant_assignment(role: str, company_id, vendor_id) -> None:
    """
    Validate the tenant link a user carries for its role.

    HR admins belong to exactly one company and no vendor; vendor admins belong
    to exactly one vendor and no company.

    Raises:
        ValueError: If the role is unknown or the tenant link is inconsistent
    """
    if role == ROLE_HR_ADMIN:
        if company_id is None or vendor_id is not None:
            raise ValueError("HR_ADMIN must have companyId, HR_ADMIN must not have vendorId")
        return
    if role == ROLE_VENDOR_ADMIN:
        if vendor_id is None or company_id is not None:
            raise ValueError("VENDOR_ADMIN must have vendorId, VENDOR_ADMIN must not have companyId")
        return
    raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALL_ROLES)}")
