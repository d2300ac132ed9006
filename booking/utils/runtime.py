"""Runtime metadata helpers for health and build-info endpoints."""

import os
import time
from typing import Dict, Optional

SERVICE_NAME = "wellness-booking-service"

_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    """Seconds elapsed since this module was first imported."""
    return round(time.monotonic() - _STARTED_AT, 3)


def _env_or_none(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value if value else None


def build_info() -> Dict[str, Optional[str]]:
    """Return build and deployment metadata injected by CI."""
    return {
        "build_sha": _env_or_none("BUILD_SHA"),
        "build_timestamp": _env_or_none("BUILD_TIMESTAMP"),
        "image_tag": _env_or_none("IMAGE_TAG"),
        "service_name": SERVICE_NAME,
        "version": os.getenv("VERSION", "unknown"),
    }
