"""
FastAPI app assembly: logging, middleware and router wiring.
Includes the health endpoint that spans the database and the process.
"""
import logging
import time
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from starlette.requests import Request
from starlette.responses import JSONResponse

from booking.config import get_settings
from booking.db.database import get_db, ping_database
from booking.api.auth import router as auth_router
from booking.api.events import router as events_router
from booking.api.event_items import router as event_items_router
from booking.api.location import router as location_router
from booking.api.support import router as support_router
from booking.utils.runtime import SERVICE_NAME, uptime_seconds

settings = get_settings()

# Configure logging
LOG_LEVEL_NAME = settings.log_level
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Wellness Booking Service",
    description="API for requesting wellness events from vendors and approving proposed dates.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

request_logger = logging.getLogger("booking.requests")


# Middleware: log method, path, status and duration of every request
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    request_logger.info(
        "%s %s %s %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse({"detail": "An unexpected error occurred"}, status_code=500)


app.include_router(auth_router)
app.include_router(events_router)
app.include_router(event_items_router)
app.include_router(location_router)
app.include_router(support_router)


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    database_ok = ping_database(db)
    payload = {
        "status": "ok" if database_ok else "error",
        "service": SERVICE_NAME,
        "database": "connected" if database_ok else "disconnected",
        "uptime_seconds": uptime_seconds(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not database_ok:
        logger.error("health_check_failed: database unreachable")
        return JSONResponse(payload, status_code=503)
    return payload
