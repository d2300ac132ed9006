"""
App assembly entry point.

Re-exports the FastAPI `app` from `booking.api.main` so servers can be
started with `uvicorn app:app`.
"""

from booking.api.main import app  # noqa: F401
