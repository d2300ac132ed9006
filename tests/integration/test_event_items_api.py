from booking.db import models
from booking.utils.roles import STATUS_APPROVED
from tests.conftest import future_days


def test_vendor_creates_item(client, tenants, auth_headers, db_session):
    resp = client.post(
        "/event-items",
        json={"name": "  Sound Bath  ", "description": "Guided relaxation"},
        headers=auth_headers(tenants["vendor_zen"]),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Sound Bath"
    assert body["vendor_id"] == str(tenants["zen"].id)
    audit = db_session.query(models.AuditLog).filter(models.AuditLog.action_type == "event_item_create").one()
    assert str(audit.target_id) == body["id"]


def test_hr_cannot_create_item(client, tenants, auth_headers):
    resp = client.post("/event-items", json={"name": "Sound Bath"}, headers=auth_headers(tenants["hr_acme"]))
    assert resp.status_code == 403


def test_item_validation(client, tenants, auth_headers):
    headers = auth_headers(tenants["vendor_zen"])
    assert client.post("/event-items", json={"name": ""}, headers=headers).status_code == 422
    assert client.post("/event-items", json={"name": "x" * 201}, headers=headers).status_code == 422
    assert client.post("/event-items", json={"name": "Ok", "description": "d" * 1001}, headers=headers).status_code == 422


def test_list_items_with_vendor_and_status(client, tenants, event_item_factory, event_factory, auth_headers):
    yoga = event_item_factory(tenants["zen"], "Office Yoga Session")
    spin = event_item_factory(tenants["fit"], "Spin Class")
    event_factory(tenants["acme"], yoga, status=STATUS_APPROVED, confirmed_date=future_days()[0])

    resp = client.get("/event-items", headers=auth_headers(tenants["hr_globex"]))
    assert resp.status_code == 200
    by_id = {item["id"]: item for item in resp.json()}
    assert by_id[str(yoga.id)]["has_approved_event"] is True
    assert by_id[str(yoga.id)]["vendor"]["name"] == "Zen Studio"
    assert by_id[str(spin.id)]["has_approved_event"] is False


def test_list_items_returns_full_catalogue(client, tenants, auth_headers, db_session):
    db_session.add_all(
        [models.EventItem(name=f"Session {n}", vendor_id=tenants["zen"].id) for n in range(520)]
    )
    db_session.commit()

    resp = client.get("/event-items", headers=auth_headers(tenants["hr_acme"]))
    assert resp.status_code == 200
    assert len(resp.json()) == 520


def test_list_items_requires_authentication(client):
    assert client.get("/event-items").status_code == 401


def test_my_items_scoped_to_vendor(client, tenants, event_item_factory, auth_headers):
    event_item_factory(tenants["zen"], "Office Yoga Session")
    event_item_factory(tenants["zen"], "Meditation Workshop")
    event_item_factory(tenants["fit"], "Spin Class")

    resp = client.get("/event-items/my-items", headers=auth_headers(tenants["vendor_zen"]))
    assert resp.status_code == 200
    assert sorted(item["name"] for item in resp.json()) == ["Meditation Workshop", "Office Yoga Session"]

    assert client.get("/event-items/my-items", headers=auth_headers(tenants["hr_acme"])).status_code == 403
