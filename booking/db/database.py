"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes FastAPI dependencies.
"""
import os
import sys
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from booking.config import database_url_from_env

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so module import time during collection relies on ``sys.modules``.
    ``PYTEST_RUNNING=1`` forces the detection explicitly.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


# Resolution order:
# 1. BOOKING_TEST_DB when set (explicit test database).
# 2. In-memory SQLite when running under pytest.
# 3. DATABASE_URL or the POSTGRES_* components.
explicit_test_db = os.getenv("BOOKING_TEST_DB")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _engine_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif _is_pytest_runtime():
    # StaticPool keeps a single connection so the schema persists across sessions
    DATABASE_URL = SQLITE_MEMORY_URL
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
else:
    DATABASE_URL = database_url_from_env()
    if not DATABASE_URL:
        raise ValueError(
            "Missing database configuration: set DATABASE_URL or POSTGRES_USER, "
            "POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_PORT and POSTGRES_DB"
        )
    _engine_kwargs = {"pool_pre_ping": True}

engine = create_engine(DATABASE_URL, **_engine_kwargs)

# An in-memory database has no migrations applied; create the schema eagerly.
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    from booking.db import models  # local import to avoid circular import at module load

    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping_database(db) -> bool:
    """Run a trivial query; return False when the database is unreachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
