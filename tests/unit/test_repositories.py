from datetime import datetime, timedelta, timezone

from booking.db import models, schemas
from booking.db.repositories import companies as company_repo
from booking.db.repositories import tokens as token_repo
from booking.db.repositories import users as user_repo
from booking.db.repositories import vendors as vendor_repo
from booking.utils import token_crypto


def test_company_and_vendor_roundtrip(db_session):
    company = company_repo.create_company(db_session, schemas.CompanyCreate(name="  Initech  "))
    vendor = vendor_repo.create_vendor(
        db_session, schemas.VendorCreate(name="Calm Co", contact_email="Team@Calm.test")
    )
    assert company_repo.get_company(db_session, company.id).name == "Initech"
    assert vendor_repo.get_vendor(db_session, vendor.id).contact_email == "team@calm.test"


def test_create_user_hashes_password(db_session, company_factory):
    company = company_factory("Initech")
    user = user_repo.create_user(
        db_session,
        schemas.UserCreate(username="hr_initech", password="secret123", role="HR_ADMIN", company_id=company.id),
    )
    assert user.password_hash != "secret123"
    assert token_crypto.verify_password("secret123", user.password_hash)
    assert user_repo.get_user_by_username(db_session, "hr_initech").id == user.id
    assert user_repo.get_user(db_session, user.id).role == "HR_ADMIN"


def test_revoke_is_idempotent_and_purge_removes_expired(db_session, tenants):
    user = tenants["hr_acme"]
    now = datetime.now(timezone.utc)
    token_repo.revoke_token(db_session, jti="old", user_id=user.id, token_type="access", expires_at=now - timedelta(hours=1))
    token_repo.revoke_token(db_session, jti="old", user_id=user.id, token_type="access", expires_at=now - timedelta(hours=1))
    token_repo.revoke_token(db_session, jti="live", user_id=user.id, token_type="refresh", expires_at=now + timedelta(days=1))
    assert db_session.query(models.RevokedToken).count() == 2

    assert token_repo.purge_expired(db_session, now=now) == 1
    assert not token_repo.is_revoked(db_session, "old")
    assert token_repo.is_revoked(db_session, "live")
