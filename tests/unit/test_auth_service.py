from datetime import datetime, timedelta, timezone

import pytest

from booking.config import Settings
from booking.db import models
from booking.services.auth_service import AuthService
from booking.services.errors import AuthenticationError
from booking.utils import token_crypto
from booking.utils.roles import ROLE_HR_ADMIN
from tests.conftest import TEST_PASSWORD


@pytest.fixture
def service(db_session):
    return AuthService(db_session, Settings())


def test_authenticate_success(service, tenants):
    user = service.authenticate("hr_acme", TEST_PASSWORD)
    assert user.id == tenants["hr_acme"].id


def test_authenticate_trims_username(service, tenants):
    assert service.authenticate("  hr_acme ", TEST_PASSWORD).id == tenants["hr_acme"].id


@pytest.mark.parametrize("username,password", [("hr_acme", "wrong-password"), ("nobody", "password123")])
def test_authenticate_failures_share_message(service, tenants, username, password):
    with pytest.raises(AuthenticationError) as excinfo:
        service.authenticate(username, password)
    assert excinfo.value.message == "Invalid credentials"
    assert excinfo.value.status_code == 401


def test_issued_claims_mirror_user(service, tenants):
    user = tenants["vendor_zen"]
    tokens = service.issue_tokens(user)
    claims = token_crypto.decode_token(tokens.access_token, secret=service.settings.jwt_secret)
    assert claims["sub"] == str(user.id)
    assert claims["role"] == user.role
    assert claims["vendor_id"] == str(user.vendor_id)
    assert claims["company_id"] is None
    assert claims["type"] == "access"
    refresh_claims = token_crypto.decode_token(tokens.refresh_token, secret=service.settings.jwt_refresh_secret)
    assert refresh_claims["type"] == "refresh"


def test_verify_access_token(service, tenants):
    tokens = service.issue_tokens(tenants["hr_acme"])
    authenticated = service.verify_access_token(tokens.access_token)
    assert authenticated.user.id == tenants["hr_acme"].id
    assert authenticated.claims["jti"]


def test_refresh_token_is_not_an_access_token(service, tenants):
    tokens = service.issue_tokens(tenants["hr_acme"])
    with pytest.raises(AuthenticationError):
        service.verify_access_token(tokens.refresh_token)


def test_expired_access_token_rejected(service, tenants):
    user = tenants["hr_acme"]
    token = token_crypto.encode_token(
        {"sub": str(user.id), "type": "access"},
        secret=service.settings.jwt_secret,
        expires_in=timedelta(minutes=1),
        now=datetime.now(timezone.utc) - timedelta(hours=1),
    )
    with pytest.raises(AuthenticationError):
        service.verify_access_token(token)


def test_deleted_user_token_rejected(service, tenants, db_session):
    tokens = service.issue_tokens(tenants["hr_globex"])
    db_session.delete(tenants["hr_globex"])
    db_session.commit()
    with pytest.raises(AuthenticationError):
        service.verify_access_token(tokens.access_token)


def test_role_comes_from_database_not_claims(service, tenants):
    user = tenants["hr_acme"]
    forged = token_crypto.encode_token(
        {"sub": str(user.id), "type": "access", "role": "VENDOR_ADMIN"},
        secret=service.settings.jwt_secret,
        expires_in=timedelta(minutes=5),
    )
    assert service.verify_access_token(forged).user.role == ROLE_HR_ADMIN


def test_refresh_rotates_tokens(service, tenants, db_session):
    tokens = service.issue_tokens(tenants["hr_acme"])
    user, new_tokens = service.refresh(tokens.refresh_token)
    assert user.id == tenants["hr_acme"].id
    assert new_tokens.refresh_token != tokens.refresh_token
    with pytest.raises(AuthenticationError) as excinfo:
        service.refresh(tokens.refresh_token)
    assert excinfo.value.message == "Invalid refresh token"
    assert db_session.query(models.RevokedToken).count() == 1


def test_refresh_rejects_access_token(service, tenants):
    tokens = service.issue_tokens(tenants["hr_acme"])
    with pytest.raises(AuthenticationError):
        service.refresh(tokens.access_token)


def test_logout_revokes_access_and_refresh(service, tenants, db_session):
    tokens = service.issue_tokens(tenants["vendor_zen"])
    authenticated = service.verify_access_token(tokens.access_token)
    service.logout(authenticated, tokens.refresh_token)

    revoked = {row.token_type for row in db_session.query(models.RevokedToken).all()}
    assert revoked == {"access", "refresh"}
    with pytest.raises(AuthenticationError):
        service.verify_access_token(tokens.access_token)
    with pytest.raises(AuthenticationError):
        service.refresh(tokens.refresh_token)


def test_logout_purges_expired_revocations(service, tenants, db_session):
    user = tenants["vendor_zen"]
    db_session.add(
        models.RevokedToken(
            jti="stale-jti",
            user_id=user.id,
            token_type="access",
            expires_at=datetime.now(timezone.utc) - timedelta(hours=1),
        )
    )
    db_session.commit()

    tokens = service.issue_tokens(user)
    service.logout(service.verify_access_token(tokens.access_token), tokens.refresh_token)

    jtis = {row.jti for row in db_session.query(models.RevokedToken).all()}
    assert "stale-jti" not in jtis
    assert len(jtis) == 2


def test_logout_ignores_foreign_or_invalid_refresh_token(service, tenants, db_session):
    own = service.issue_tokens(tenants["hr_acme"])
    other = service.issue_tokens(tenants["hr_globex"])
    authenticated = service.verify_access_token(own.access_token)
    service.logout(authenticated, other.refresh_token)
    service.logout(authenticated, "garbage")

    assert db_session.query(models.RevokedToken).count() == 1
    _, rotated = service.refresh(other.refresh_token)
    assert rotated.access_token
