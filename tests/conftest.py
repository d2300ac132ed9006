import os

# Must be set before the application modules read their configuration
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("POSTAL_CODE_API_URL", None)

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from booking.config import get_settings
from booking.db import models
from booking.db import database as db_module
from booking.api.main import app
from booking.services.auth_service import AuthService
from booking.services.location_service import reset_location_service_for_tests
from booking.utils import token_crypto
from booking.utils.roles import ROLE_HR_ADMIN, ROLE_VENDOR_ADMIN, STATUS_PENDING

TEST_PASSWORD = "password123"

# Argon2 is deliberately slow; hash the shared test password once per run
_TEST_PASSWORD_HASH = token_crypto.hash_password(TEST_PASSWORD)


def _clear_tables():
    with db_module.engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())


# Per-test session; rows are removed afterwards so tests stay independent
@pytest.fixture(autouse=True)
def db_session():
    session = db_module.SessionLocal()

    def _override_get_db():
        yield session

    app.dependency_overrides[db_module.get_db] = _override_get_db
    try:
        yield session
    finally:
        app.dependency_overrides.pop(db_module.get_db, None)
        session.rollback()
        session.close()
        _clear_tables()


@pytest.fixture(autouse=True)
def _reset_singletons():
    get_settings.cache_clear()
    reset_location_service_for_tests()
    yield
    get_settings.cache_clear()
    reset_location_service_for_tests()


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def company_factory(db_session: Session):
    def _create(name: str = "Acme Corp"):
        company = models.Company(name=name, address="1 Main Street", contact_email="hr@acme.test")
        db_session.add(company)
        db_session.commit()
        db_session.refresh(company)
        return company
    return _create


@pytest.fixture
def vendor_factory(db_session: Session):
    def _create(name: str = "Zen Studio"):
        vendor = models.Vendor(name=name, description="Wellness vendor", contact_email="hello@zen.test")
        db_session.add(vendor)
        db_session.commit()
        db_session.refresh(vendor)
        return vendor
    return _create


@pytest.fixture
def user_factory(db_session: Session):
    def _create(username: str, role: str, company=None, vendor=None):
        user = models.User(
            username=username,
            password_hash=_TEST_PASSWORD_HASH,
            role=role,
            company_id=company.id if company is not None else None,
            vendor_id=vendor.id if vendor is not None else None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def event_item_factory(db_session: Session):
    def _create(vendor, name: str = "Office Yoga Session", description: str = "Yoga at your office"):
        item = models.EventItem(name=name, description=description, vendor_id=vendor.id)
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item
    return _create


def future_days(start: int = 7, step: int = 7, count: int = 3):
    today = date.today()
    return [today + timedelta(days=start + i * step) for i in range(count)]


@pytest.fixture
def event_factory(db_session: Session):
    def _create(company, item, *, status: str = STATUS_PENDING, proposed=None, **extra):
        days = proposed or future_days()
        event = models.Event(
            company_id=company.id,
            event_item_id=item.id,
            vendor_id=item.vendor_id,
            proposed_dates=[d.isoformat() for d in days],
            location_postal_code="123456",
            location_street_name="Tech Street",
            status=status,
            **extra,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _create


@pytest.fixture
def tenants(company_factory, vendor_factory, user_factory):
    """Two companies and two vendors, each with one administrator."""
    acme = company_factory("Acme Corp")
    globex = company_factory("Globex Ltd")
    zen = vendor_factory("Zen Studio")
    fit = vendor_factory("Fit Club")
    return {
        "acme": acme,
        "globex": globex,
        "zen": zen,
        "fit": fit,
        "hr_acme": user_factory("hr_acme", ROLE_HR_ADMIN, company=acme),
        "hr_globex": user_factory("hr_globex", ROLE_HR_ADMIN, company=globex),
        "vendor_zen": user_factory("vendor_zen", ROLE_VENDOR_ADMIN, vendor=zen),
        "vendor_fit": user_factory("vendor_fit", ROLE_VENDOR_ADMIN, vendor=fit),
    }


@pytest.fixture
def auth_headers(db_session: Session):
    def _headers(user):
        tokens = AuthService(db_session).issue_tokens(user)
        return {"Authorization": f"Bearer {tokens.access_token}"}
    return _headers
