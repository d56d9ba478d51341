from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import httpx
import pytest

from src.adapters.api.dependencies import (
    get_alerts_service,
    get_arrivals_service,
    get_station_repository,
)
from src.app.services.arrivals_service import ArrivalsResult
from src.domain.exceptions import StationNotFound, UpstreamAlertsFailure
from src.domain.models import (
    AlertType,
    Arrival,
    Direction,
    ServiceAlert,
    Station,
)
from src.main import app

TIMES_SQ = Station(
    id="127",
    name="Times Sq - 42 St",
    lines=frozenset({"3", "1", "2"}),
    lat=40.755983,
    lng=-73.986229,
)


@dataclass(slots=True)
class _FakeStationRepository:
    async def initialize(self) -> None:
        return None

    def get_station(self, station_id: str) -> Station | None:
        return TIMES_SQ if station_id == "127" else None

    def list_stations(self) -> tuple[Station, ...]:
        return (TIMES_SQ,)


class _FakeArrivalsService:
    async def get_arrivals(self, *, station_id: str, now_s: float | None = None):
        if station_id != "127":
            raise StationNotFound(station_id)
        arrival = Arrival(
            route_id="1",
            destination="Van Cortlandt Park-242 St",
            arrival_time=datetime(2024, 5, 1, 12, 2, 0, tzinfo=timezone.utc),
            direction=Direction.UPTOWN,
        )
        return ArrivalsResult(station=TIMES_SQ, arrivals=(arrival,), feeds=())


class _FakeAlertsService:
    alert = ServiceAlert(
        id="lmm:1-A",
        route_id="A",
        alert_type=AlertType.PLANNED_WORK,
        header_text="Planned work",
        description_text="No A trains",
        severity=15,
        active_period_start=datetime(2024, 5, 1, 4, 0, tzinfo=timezone.utc),
    )

    async def list_alerts(self):
        return (self.alert,)

    async def list_alerts_for_route(self, *, route_id: str):
        return (self.alert,) if route_id == "A" else ()


class _DownAlertsService:
    async def list_alerts(self):
        raise UpstreamAlertsFailure("https://feeds.test/alerts", "HTTP 503")


class _BrokenArrivalsService:
    async def get_arrivals(self, *, station_id: str, now_s: float | None = None):
        raise KeyError("bug")


async def _get(path: str, *, raise_app_exceptions: bool = True) -> httpx.Response:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path)


@pytest.mark.unit
@pytest.mark.anyio
async def test_list_stations() -> None:
    app.dependency_overrides[get_station_repository] = _FakeStationRepository

    resp = await _get("/api/stations")

    app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert resp.json() == [
        {
            "id": "127",
            "name": "Times Sq - 42 St",
            "line": "1 2 3",
            "lines": ["1", "2", "3"],
            "lat": 40.755983,
            "lng": -73.986229,
        }
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_arrivals_returns_camel_case_records() -> None:
    app.dependency_overrides[get_arrivals_service] = _FakeArrivalsService

    resp = await _get("/api/stations/127/arrivals")

    app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert resp.json() == [
        {
            "routeId": "1",
            "destination": "Van Cortlandt Park-242 St",
            "arrivalTime": "2024-05-01T12:02:00.000Z",
            "direction": "Uptown",
            "status": "On Time",
        }
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_arrivals_unknown_station_is_404() -> None:
    app.dependency_overrides[get_arrivals_service] = _FakeArrivalsService

    resp = await _get("/api/stations/nope/arrivals")

    app.dependency_overrides.clear()

    assert resp.status_code == 404
    assert resp.json() == {"message": "Station not found"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_unexpected_failure_is_500_without_details() -> None:
    app.dependency_overrides[get_arrivals_service] = _BrokenArrivalsService

    resp = await _get("/api/stations/127/arrivals", raise_app_exceptions=False)

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to fetch real-time data"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_list_alerts_omits_missing_period_fields() -> None:
    app.dependency_overrides[get_alerts_service] = _FakeAlertsService

    resp = await _get("/api/alerts")

    app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert resp.json() == [
        {
            "id": "lmm:1-A",
            "routeId": "A",
            "alertType": "Planned Work",
            "headerText": "Planned work",
            "descriptionText": "No A trains",
            "activePeriodStart": "2024-05-01T04:00:00.000Z",
            "severity": 15,
        }
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_alerts_by_route() -> None:
    app.dependency_overrides[get_alerts_service] = _FakeAlertsService

    hit = await _get("/api/alerts/A")
    miss = await _get("/api/alerts/7")

    app.dependency_overrides.clear()

    assert [a["id"] for a in hit.json()] == ["lmm:1-A"]
    assert miss.status_code == 200
    assert miss.json() == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_alerts_feed_down_is_502() -> None:
    app.dependency_overrides[get_alerts_service] = _DownAlertsService

    resp = await _get("/api/alerts")

    app.dependency_overrides.clear()

    assert resp.status_code == 502
    assert resp.json() == {"message": "Failed to fetch service alerts"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    resp = await _get("/health")
    assert resp.json() == {"status": "ok"}
