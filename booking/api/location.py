"""
Postal code lookup endpoint used to prefill event locations.
"""
from fastapi import APIRouter, Depends

from booking.api.deps import get_current_user, to_http_exception
from booking.db import models, schemas
from booking.services.errors import ServiceError
from booking.services.location_service import LocationService, get_location_service

router = APIRouter(tags=["location"])


@router.get("/postal-code/{code}", response_model=schemas.PostalCodeLookup)
def lookup_postal_code(
    code: str,
    _user: models.User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    try:
        return service.lookup(code)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
