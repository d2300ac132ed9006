"""
Permission checks for resource access control.

Key helpers:
- can_access_event(event, user)
- owns_event_item(item, user)
- tenant_error(user)
"""
import logging
from typing import Optional

from booking.utils.roles import ROLE_HR_ADMIN, ROLE_VENDOR_ADMIN

logger = logging.getLogger(__name__)

HR_ADMIN_WITHOUT_COMPANY = "HR Admin must have associated company"
VENDOR_ADMIN_WITHOUT_VENDOR = "Vendor Admin must have associated vendor"


def tenant_error(user) -> Optional[str]:
    """Return the reason a user's tenant link is unusable, or None when valid."""
    if user is None:
        return None
    if user.role == ROLE_HR_ADMIN and not user.company_id:
        return HR_ADMIN_WITHOUT_COMPANY
    if user.role == ROLE_VENDOR_ADMIN and not user.vendor_id:
        return VENDOR_ADMIN_WITHOUT_VENDOR
    return None


def can_access_event(event, user) -> bool:
    """HR admins see their company's events; vendor admins their vendor's."""
    if event is None or user is None:
        return False
    if user.role == ROLE_HR_ADMIN:
        allowed = user.company_id is not None and event.company_id == user.company_id
    elif user.role == ROLE_VENDOR_ADMIN:
        allowed = user.vendor_id is not None and event.vendor_id == user.vendor_id
    else:
        allowed = False
    if not allowed:
        logger.warning(
            "event_access_denied user_id=%s role=%s event_id=%s",
            getattr(user, "id", None),
            getattr(user, "role", None),
            getattr(event, "id", None),
        )
    return allowed


def owns_event_item(item, user) -> bool:
    if item is None or user is None:
        return False
    return user.role == ROLE_VENDOR_ADMIN and user.vendor_id is not None and item.vendor_id == user.vendor_id
