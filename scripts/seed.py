"""Populate the database with demo companies, vendors, users and events."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError

from booking.db import models, database, schemas
from booking.db.repositories import companies as company_repo
from booking.db.repositories import users as user_repo
from booking.db.repositories import vendors as vendor_repo
from booking.utils.roles import (
    ROLE_HR_ADMIN,
    ROLE_VENDOR_ADMIN,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
)


logger = logging.getLogger("booking.scripts.seed")

DEFAULT_PASSWORD = "password123"

# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()

COMPANIES = [
    {
        "name": "Tech Innovations Inc",
        "address": "123 Tech Street, Singapore 123456",
        "contact_email": "hr@techinnovations.com",
        "contact_phone": "+65 6123 4567",
    },
    {
        "name": "Global Solutions Pte Ltd",
        "address": "456 Business Avenue, Singapore 654321",
        "contact_email": "contact@globalsolutions.com",
        "contact_phone": "+65 6234 5678",
    },
    {
        "name": "Creative Minds Co",
        "address": "789 Innovation Drive, Singapore 789012",
        "contact_email": "info@creativeminds.com",
        "contact_phone": "+65 6345 6789",
    },
]

VENDORS = [
    {
        "name": "Wellness Spa & Massage",
        "description": "Premium spa and massage services for corporate wellness",
        "contact_email": "bookings@wellnessspa.com",
        "contact_phone": "+65 6456 7890",
        "address": "100 Wellness Road, Singapore 100100",
    },
    {
        "name": "Fitness First Corporate",
        "description": "Corporate fitness programs and gym memberships",
        "contact_email": "corporate@fitnessfirst.com",
        "contact_phone": "+65 6567 8901",
        "address": "200 Fitness Lane, Singapore 200200",
    },
    {
        "name": "Mindful Yoga Studio",
        "description": "Yoga and mindfulness sessions for workplace wellness",
        "contact_email": "hello@mindfulyoga.com",
        "contact_phone": "+65 6678 9012",
        "address": "300 Zen Street, Singapore 300300",
    },
    {
        "name": "Healthy Eats Catering",
        "description": "Nutritious meal plans and healthy catering services",
        "contact_email": "orders@healthyeats.com",
        "contact_phone": "+65 6789 0123",
        "address": "400 Food Court, Singapore 400400",
    },
]

# (vendor index, name, description)
EVENT_ITEMS = [
    (0, "Full Body Massage Session", "60-minute relaxing full body massage for employees"),
    (0, "Chair Massage Package", "15-minute chair massage sessions for office"),
    (0, "Aromatherapy Session", "Relaxing aromatherapy treatment"),
    (1, "Group Fitness Class", "High-energy group fitness session"),
    (1, "Personal Training Session", "One-on-one personal training"),
    (1, "Corporate Gym Membership", "Monthly gym membership for employees"),
    (2, "Office Yoga Session", "Yoga session conducted at your office"),
    (2, "Meditation Workshop", "Guided meditation and mindfulness workshop"),
    (2, "Stress Management Class", "Learn techniques to manage workplace stress"),
    (3, "Healthy Lunch Catering", "Nutritious lunch for team events"),
    (3, "Nutrition Workshop", "Educational workshop on healthy eating"),
    (3, "Smoothie Bar Setup", "Fresh smoothie bar for office events"),
]

# (username, role, tenant index)
USERS = [
    ("hr_tech", ROLE_HR_ADMIN, 0),
    ("hr_global", ROLE_HR_ADMIN, 1),
    ("hr_creative", ROLE_HR_ADMIN, 2),
    ("vendor_spa", ROLE_VENDOR_ADMIN, 0),
    ("vendor_fitness", ROLE_VENDOR_ADMIN, 1),
    ("vendor_yoga", ROLE_VENDOR_ADMIN, 2),
    ("vendor_catering", ROLE_VENDOR_ADMIN, 3),
]

# Deleted children first so foreign keys never dangle
_RESET_ORDER = [
    models.AuditLog,
    models.RevokedToken,
    models.Event,
    models.EventItem,
    models.User,
    models.Vendor,
    models.Company,
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the booking database with demo data")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all existing rows before seeding",
    )
    parser.add_argument(
        "--password",
        default=DEFAULT_PASSWORD,
        help=f"Password assigned to every seeded user (default: {DEFAULT_PASSWORD})",
    )
    return parser.parse_args(argv)


def reset(session) -> None:
    for model in _RESET_ORDER:
        session.query(model).delete(synchronize_session=False)
    session.flush()


def _event_rows(now: datetime):
    days = {n: (now + timedelta(days=n)).date().isoformat() for n in (7, 10, 14, 17, 21, 24)}
    first_window = [days[7], days[14], days[21]]
    second_window = [days[10], days[17], days[24]]
    # (company, item, proposed, status, extra, created_days_ago)
    return [
        (0, 0, first_window, STATUS_PENDING, {}, 0),
        (1, 6, second_window, STATUS_PENDING, {}, 0),
        (0, 3, first_window, STATUS_APPROVED, {"confirmed_date": (now + timedelta(days=14)).date()}, 3),
        (2, 9, first_window, STATUS_REJECTED,
         {"remarks": "Unable to accommodate due to high demand during proposed dates"}, 5),
        (1, 10, second_window, STATUS_PENDING, {}, 0),
        (2, 7, first_window, STATUS_PENDING, {}, 0),
    ]


_LOCATIONS = [
    ("123456", "Tech Street"),
    ("654321", "Business Avenue"),
    ("789012", "Innovation Drive"),
]


def seed(session, password: str) -> dict:
    companies = [company_repo.create_company(session, schemas.CompanyCreate(**data), commit=False) for data in COMPANIES]
    vendors = [vendor_repo.create_vendor(session, schemas.VendorCreate(**data), commit=False) for data in VENDORS]

    items = [
        models.EventItem(name=name, description=description, vendor_id=vendors[vendor_idx].id)
        for vendor_idx, name, description in EVENT_ITEMS
    ]
    session.add_all(items)
    session.flush()

    users = []
    for username, role, tenant_idx in USERS:
        payload = schemas.UserCreate(
            username=username,
            password=password,
            role=role,
            company_id=companies[tenant_idx].id if role == ROLE_HR_ADMIN else None,
            vendor_id=vendors[tenant_idx].id if role == ROLE_VENDOR_ADMIN else None,
        )
        users.append(user_repo.create_user(session, payload, commit=False))

    now = datetime.now(timezone.utc)
    events = []
    for company_idx, item_idx, proposed, status, extra, days_ago in _event_rows(now):
        item = items[item_idx]
        postal_code, street_name = _LOCATIONS[company_idx]
        created = now - timedelta(days=days_ago)
        events.append(
            models.Event(
                company_id=companies[company_idx].id,
                event_item_id=item.id,
                vendor_id=item.vendor_id,
                proposed_dates=proposed,
                location_postal_code=postal_code,
                location_street_name=street_name,
                status=status,
                date_created=created,
                last_modified=created,
                **extra,
            )
        )
    session.add_all(events)
    session.flush()

    return {
        "companies": companies,
        "vendors": vendors,
        "event_items": items,
        "users": users,
        "events": events,
    }


def print_summary(created: dict, password: str) -> None:
    print("Database seeding completed.")
    print(f"Companies: {len(created['companies'])}")
    print(f"Vendors: {len(created['vendors'])}")
    print(f"Event Items: {len(created['event_items'])}")
    print(f"Users: {len(created['users'])}")
    print(f"Events: {len(created['events'])}")
    print("")
    print("Test credentials:")
    tenants = {ROLE_HR_ADMIN: created["companies"], ROLE_VENDOR_ADMIN: created["vendors"]}
    for username, role, tenant_idx in USERS:
        tenant = tenants[role][tenant_idx]
        print(f"  {role:<13} {username:<16} password={password}  tenant={tenant.name}")


def run(reset_first: bool, password: str) -> int:
    if len(password) < 6:
        print("Password must be at least 6 characters.", file=sys.stderr)
        return 1
    session = SessionLocal()
    try:
        if reset_first:
            logger.info("Clearing existing data")
            reset(session)
        elif session.query(models.User).first() is not None:
            print("Database already contains users; pass --reset to reseed.")
            return 0
        created = seed(session, password)
        session.commit()
        logger.info("Seed complete", extra={"events": len(created["events"]), "users": len(created["users"])})
        print_summary(created, password)
        return 0
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Seeding failed: %s", exc)
        print(f"Error seeding database: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        session.rollback()
        logger.exception("Seeding aborted")
        print(f"Error seeding database: {exc}", file=sys.stderr)
        return 1
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return run(reset_first=args.reset, password=args.password)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
