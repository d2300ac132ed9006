"""
Build information endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter

from booking.utils.runtime import build_info

router = APIRouter(tags=["support"])


@router.get("/build-info")
def get_build_info():
    """Return build and deployment information for the running service."""
    return build_info()
