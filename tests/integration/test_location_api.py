from booking.api.main import app
from booking.services.location_service import LocationService, get_location_service


class StubProvider:
    def __init__(self, payload):
        self.payload = payload

    def get(self, url, params=None, timeout=None):
        return self

    def raise_for_status(self):
        return None

    def json(self):
        return self.payload


def test_lookup_without_provider(client, tenants, auth_headers):
    resp = client.get("/postal-code/123456", headers=auth_headers(tenants["hr_acme"]))
    assert resp.status_code == 200
    assert resp.json() == {"postal_code": "123456", "street_name": None, "area": None, "district": None}


def test_lookup_with_provider(client, tenants, auth_headers):
    service = LocationService(
        base_url="https://geo.example.com/search",
        session=StubProvider({"results": [{"ROAD_NAME": "TECH STREET"}]}),
    )
    app.dependency_overrides[get_location_service] = lambda: service
    try:
        resp = client.get("/postal-code/123456", headers=auth_headers(tenants["hr_acme"]))
    finally:
        app.dependency_overrides.pop(get_location_service, None)
    assert resp.status_code == 200
    assert resp.json()["street_name"] == "TECH STREET"


def test_blank_code(client, tenants, auth_headers):
    resp = client.get("/postal-code/%20", headers=auth_headers(tenants["hr_acme"]))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Postal code is required"


def test_lookup_requires_authentication(client):
    assert client.get("/postal-code/123456").status_code == 401
