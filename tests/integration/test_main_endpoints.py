import logging

from fastapi.testclient import TestClient

from booking.api import main as main_module
from booking.api.main import app
from booking.api.events import get_event_service


def test_health_ok(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"
    assert body["service"] == "wellness-booking-service"
    assert body["uptime_seconds"] >= 0
    assert body["timestamp"]


def test_health_database_down(client, monkeypatch):
    monkeypatch.setattr(main_module, "ping_database", lambda db: False)
    resp = client.get("/health")
    assert resp.status_code == 503
    assert resp.json()["database"] == "disconnected"


def test_build_info(client, monkeypatch):
    monkeypatch.setenv("VERSION", "2.0.0")
    resp = client.get("/build-info")
    assert resp.status_code == 200
    assert resp.json()["version"] == "2.0.0"


def test_unexpected_error_returns_500(tenants, auth_headers):
    class ExplodingService:
        def list_events(self, user):
            raise RuntimeError("boom")

    app.dependency_overrides[get_event_service] = lambda: ExplodingService()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/events", headers=auth_headers(tenants["hr_acme"]))
    finally:
        app.dependency_overrides.pop(get_event_service, None)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "An unexpected error occurred"}


def test_cors_preflight_allows_frontend(client):
    resp = client.options(
        "/events",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"



def test_log_level_comes_from_settings():
    assert main_module.LOG_LEVEL_NAME == main_module.settings.log_level
    assert main_module.LOG_LEVEL == getattr(logging, main_module.settings.log_level, logging.INFO)
    assert logging.getLogger("booking.api.main").level == main_module.LOG_LEVEL
