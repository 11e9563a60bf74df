"""Pytest configuration and shared fixtures."""

import copy
import json

import httpx
import pytest

from infra.ota import OTAClient
from lib.hotel_api import HotelApiClient


UPSTREAM_BASE_URL = "http://upstream.test"
OTA_ENDPOINT = "https://ota.test/update"

HOTEL = {
    "id": "H1",
    "rating": 4.5,
    "rooms": [
        {
            "id": "R1",
            "roomType": "double",
            "price": 100,
            "availability": [
                {"date": "2024-01-01", "available": True},
                {"date": "2024-01-02", "available": True},
                {"date": "2024-01-03", "available": False},
            ],
        },
        {
            "id": "R2",
            "roomType": "suite",
            "price": 250,
            "availability": [
                {"date": "2024-01-01", "available": True},
                {"date": "2024-01-02", "available": True},
                {"date": "2024-01-03", "available": True},
            ],
        },
        {
            "id": "R3",
            "roomType": "single",
            "price": 60,
            "availability": [],
        },
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "online: mark test as online test (hits external APIs)")


# =============================================================================
# Fake upstream hotel API
# =============================================================================


class FakeUpstream:
    """In-memory stand-in for the upstream hotel API, served via httpx.MockTransport.

    Records every call as (method, path, params, json_body). Set
    `failures[(method, path)] = status` to make a route fail.
    """

    def __init__(self, hotel: dict):
        self.hotel = hotel
        self.calls = []
        self.failures = {}
        self.reservations = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        params = dict(request.url.params)
        self.calls.append((request.method, path, params, body))

        status = self.failures.get((request.method, path))
        if status is not None:
            return httpx.Response(status, json={"error": "boom"})

        if request.method == "GET" and path == "/hotel":
            return httpx.Response(200, json=self.hotel)

        if request.method == "PUT" and path.startswith("/room/") and path.endswith("/availability"):
            room_id = path.split("/")[2]
            if not any(str(r["id"]) == room_id for r in self.hotel["rooms"]):
                return httpx.Response(404, json={"error": "room not found"})
            return httpx.Response(200, json={"updated": len(body["dates"])})

        if request.method == "POST" and path == "/reservations":
            reservation = {"id": f"res-{len(self.reservations) + 1}", **body}
            self.reservations.append(reservation)
            return httpx.Response(201, json=reservation)

        if request.method == "GET" and path == "/reservations":
            user_id = params.get("usuarioId")
            items = [
                r for r in self.reservations
                if user_id is None or str(r.get("usuarioId")) == user_id
            ]
            return httpx.Response(200, json=items)

        return httpx.Response(404, json={"error": "unknown route"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def count(self, method: str, path_prefix: str = "") -> int:
        return sum(1 for m, p, _, _ in self.calls if m == method and p.startswith(path_prefix))


class FakeOTA:
    """Records OTA pushes. Set `status` to make the push fail."""

    def __init__(self):
        self.requests = []
        self.status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status >= 400:
            return httpx.Response(self.status, text="ota down")
        return httpx.Response(self.status, json={"status": "updated"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def payloads(self) -> list:
        return [json.loads(r.content) for r in self.requests]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def hotel_payload() -> dict:
    return copy.deepcopy(HOTEL)


@pytest.fixture
def upstream(hotel_payload) -> FakeUpstream:
    return FakeUpstream(hotel_payload)


@pytest.fixture
def fake_ota() -> FakeOTA:
    return FakeOTA()


@pytest.fixture
def hotel_client(upstream) -> HotelApiClient:
    return HotelApiClient(UPSTREAM_BASE_URL, transport=upstream.transport)


@pytest.fixture
def ota_client(fake_ota) -> OTAClient:
    return OTAClient(endpoint=OTA_ENDPOINT, api_key="secret-key", transport=fake_ota.transport)


def make_booking(**overrides) -> dict:
    booking = {
        "usuarioId": "U1",
        "propiedadId": "H1",
        "fechaInicio": "2024-01-01",
        "fechaFin": "2024-01-02",
        "roomType": "double",
    }
    booking.update(overrides)
    return booking


@pytest.fixture
def booking_data():
    """Factory for booking bodies: booking_data(roomType="suite")."""
    return make_booking
