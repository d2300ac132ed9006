"""Postal code lookup backed by an optional external address provider."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from booking.config import Settings, get_settings
from booking.db import schemas
from booking.services.errors import NotFoundError

logger = logging.getLogger(__name__)

_STREET_KEYS = ("street_name", "streetName", "ROAD_NAME", "road_name", "street")
_AREA_KEYS = ("area", "BUILDING", "building", "locality")
_DISTRICT_KEYS = ("district", "town", "city")


def _first_value(record: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value.strip() and value.strip().upper() != "NIL":
            return value.strip()
    return None


class LocationService:
    """Resolve postal codes to street names.

    Without a configured provider every lookup succeeds with a null street
    name so clients fall back to manual entry.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocationService":
        return cls(base_url=settings.postal_code_api_url, timeout=settings.postal_code_api_timeout)

    @property
    def is_enabled(self) -> bool:
        return bool(self.base_url)

    def _request_url(self, code: str):
        # Providers either embed the code in the path template or take it as a query parameter
        if "{code}" in self.base_url:
            return self.base_url.replace("{code}", quote(code, safe="")), None
        return self.base_url, {"searchVal": code, "returnGeom": "N", "getAddrDetails": "Y"}

    def _fetch(self, code: str) -> Optional[Dict[str, Any]]:
        url, params = self._request_url(code)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Postal code lookup failed for %s: %s", code, exc)
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Postal code provider response was not JSON: %s", exc)
            return None

        if isinstance(payload, dict):
            results = payload.get("results")
            if isinstance(results, list):
                return results[0] if results and isinstance(results[0], dict) else None
            return payload
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            return payload[0]
        return None

    def lookup(self, code: Optional[str]) -> schemas.PostalCodeLookup:
        cleaned = (code or "").strip()
        if not cleaned:
            raise NotFoundError("Postal code is required")
        if not self.is_enabled:
            return schemas.PostalCodeLookup(postal_code=cleaned)

        record = self._fetch(cleaned)
        if not record:
            return schemas.PostalCodeLookup(postal_code=cleaned)
        return schemas.PostalCodeLookup(
            postal_code=cleaned,
            street_name=_first_value(record, _STREET_KEYS),
            area=_first_value(record, _AREA_KEYS),
            district=_first_value(record, _DISTRICT_KEYS),
        )


_service: Optional[LocationService] = None
_lock = threading.Lock()


def get_location_service() -> LocationService:
    global _service
    with _lock:
        if _service is None:
            _service = LocationService.from_settings(get_settings())
        return _service


def reset_location_service_for_tests() -> None:
    global _service
    with _lock:
        _service = None
