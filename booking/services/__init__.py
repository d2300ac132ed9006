"""Business logic services package with public service helpers."""

from .errors import (
    ServiceError,
    NotFoundError,
    ForbiddenError,
    InvalidStateError,
    ValidationFailedError,
    AuthenticationError,
)
from .auth_service import AuthService, AuthenticatedToken
from .event_service import EventService
from .event_item_service import EventItemService
from .location_service import LocationService, get_location_service, reset_location_service_for_tests

__all__ = [
    "ServiceError",
    "NotFoundError",
    "ForbiddenError",
    "InvalidStateError",
    "ValidationFailedError",
    "AuthenticationError",
    "AuthService",
    "AuthenticatedToken",
    "EventService",
    "EventItemService",
    "LocationService",
    "get_location_service",
    "reset_location_service_for_tests",
]
