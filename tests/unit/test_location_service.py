import pytest
import requests

from booking.config import Settings
from booking.services import location_service as location_module
from booking.services.errors import NotFoundError
from booking.services.location_service import LocationService, get_location_service


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


def test_disabled_provider_returns_code_only():
    result = LocationService().lookup(" 123456 ")
    assert result.postal_code == "123456"
    assert result.street_name is None


@pytest.mark.parametrize("code", ["", "   ", None])
def test_blank_code_not_found(code):
    with pytest.raises(NotFoundError) as excinfo:
        LocationService().lookup(code)
    assert excinfo.value.message == "Postal code is required"


def test_results_payload_mapped():
    session = FakeSession(
        FakeResponse(
            {
                "found": 1,
                "results": [
                    {"ROAD_NAME": "TECH STREET", "BUILDING": "NIL", "town": "Downtown"},
                    {"ROAD_NAME": "OTHER ROAD"},
                ],
            }
        )
    )
    service = LocationService(base_url="https://geo.example.com/search/", timeout=2.5, session=session)
    result = service.lookup("123456")

    assert result.street_name == "TECH STREET"
    assert result.area is None
    assert result.district == "Downtown"
    call = session.calls[0]
    assert call["url"] == "https://geo.example.com/search"
    assert call["params"]["searchVal"] == "123456"
    assert call["timeout"] == 2.5


def test_code_template_url():
    session = FakeSession(FakeResponse({"street_name": "Business Avenue"}))
    service = LocationService(base_url="https://geo.example.com/postal/{code}", session=session)
    assert service.lookup("654321").street_name == "Business Avenue"
    assert session.calls[0]["url"] == "https://geo.example.com/postal/654321"
    assert session.calls[0]["params"] is None


def test_code_template_escapes_code_and_keeps_other_braces():
    session = FakeSession(FakeResponse({"street_name": "Harbour Road"}))
    service = LocationService(base_url="https://geo.example.com/{region}/postal/{code}", session=session)
    result = service.lookup("12 34/5")
    assert result.street_name == "Harbour Road"
    assert session.calls[0]["url"] == "https://geo.example.com/{region}/postal/12%2034%2F5"


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(exc=requests.ConnectionError("refused")),
        FakeSession(FakeResponse(status_code=502)),
        FakeSession(FakeResponse(json_error=True)),
        FakeSession(FakeResponse({"found": 0, "results": []})),
    ],
)
def test_provider_failures_fall_back_to_manual_entry(session, caplog):
    service = LocationService(base_url="https://geo.example.com/search", session=session)
    result = service.lookup("123456")
    assert result.postal_code == "123456"
    assert result.street_name is None


def test_singleton_built_from_settings(monkeypatch):
    monkeypatch.setattr(
        location_module,
        "get_settings",
        lambda: Settings(postal_code_api_url="https://geo.example.com/search", postal_code_api_timeout=1.5),
    )
    service = get_location_service()
    assert service is get_location_service()
    assert service.is_enabled
    assert service.timeout == 1.5
