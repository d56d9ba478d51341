from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from src.app.services.alerts_service import AlertsService
from src.app.services.arrivals_service import ArrivalsService
from src.domain.exceptions import StationNotFound, UpstreamAlertsFailure
from src.domain.models import (
    AlertEntity,
    DecodedFeed,
    FeedResult,
    Station,
    StopTimeUpdate,
    TransitLookups,
    TripUpdate,
)

NOW = 1_700_000_000


@dataclass(slots=True)
class FakeStationRepository:
    stations: dict[str, Station]

    async def initialize(self) -> None:
        return None

    def get_station(self, station_id: str) -> Station | None:
        return self.stations.get(station_id)

    def list_stations(self) -> tuple[Station, ...]:
        return tuple(self.stations.values())


@dataclass(slots=True)
class FakeFeedProvider:
    results: tuple[FeedResult, ...] = ()
    alerts: DecodedFeed | None = None
    calls: list[str] = field(default_factory=list)

    async def fetch_trip_feeds(self) -> tuple[FeedResult, ...]:
        self.calls.append("trips")
        return self.results

    async def fetch_alerts_feed(self) -> DecodedFeed:
        self.calls.append("alerts")
        if self.alerts is None:
            raise UpstreamAlertsFailure("https://feeds.test/alerts", "HTTP 503")
        return self.alerts


def _feed(route_id: str, stop_id: str, when: int) -> DecodedFeed:
    trip = TripUpdate(
        route_id=route_id,
        stop_time_updates=(StopTimeUpdate(stop_id=stop_id, arrival_s=when),),
    )
    return DecodedFeed(trip_updates=(trip,))


def _service(provider: FakeFeedProvider) -> ArrivalsService:
    stations = FakeStationRepository(
        {"127": Station(id="127", name="Times Sq - 42 St", lines=frozenset({"1", "2", "3"}))}
    )
    return ArrivalsService(
        station_repository=stations,
        feed_provider=provider,
        lookups=TransitLookups(route_termini={"2": {"Downtown": "Flatbush Av"}}),
    )


def test_unknown_station_fails_before_fetching_feeds() -> None:
    provider = FakeFeedProvider()

    with pytest.raises(StationNotFound):
        asyncio.run(_service(provider).get_arrivals(station_id="999", now_s=NOW))

    assert provider.calls == []


def test_failed_feed_contributes_nothing_but_is_reported() -> None:
    provider = FakeFeedProvider(
        results=(
            FeedResult(url="a", ok=True, feed=_feed("1", "127N", NOW + 300)),
            FeedResult(url="b", ok=False, error="HTTP 500"),
            FeedResult(url="c", ok=True, feed=_feed("2", "127S", NOW + 60)),
        )
    )

    result = asyncio.run(_service(provider).get_arrivals(station_id="127", now_s=NOW))

    assert [a.route_id for a in result.arrivals] == ["2", "1"]
    assert result.arrivals[0].destination == "Flatbush Av"
    assert [f.url for f in result.failed_feeds] == ["b"]
    assert result.station.id == "127"


def test_all_feeds_down_yields_empty_list() -> None:
    provider = FakeFeedProvider(
        results=(
            FeedResult(url="a", ok=False, error="timeout"),
            FeedResult(url="b", ok=False, error="HTTP 500"),
        )
    )

    result = asyncio.run(_service(provider).get_arrivals(station_id="127", now_s=NOW))

    assert result.arrivals == ()
    assert len(result.failed_feeds) == 2


def test_alerts_service_classifies_and_filters() -> None:
    provider = FakeFeedProvider(
        alerts=DecodedFeed(
            alerts=(
                AlertEntity(entity_id="e1", route_ids=("A", "C"), header_text="Delays"),
                AlertEntity(entity_id="e2", route_ids=("L",), header_text="Suspended"),
            )
        )
    )
    service = AlertsService(feed_provider=provider)

    everything = asyncio.run(service.list_alerts())
    only_l = asyncio.run(service.list_alerts_for_route(route_id="L"))

    assert [a.id for a in everything] == ["e2-L", "e1-A", "e1-C"]
    assert [a.id for a in only_l] == ["e2-L"]


def test_alerts_service_propagates_upstream_failure() -> None:
    service = AlertsService(feed_provider=FakeFeedProvider())

    with pytest.raises(UpstreamAlertsFailure):
        asyncio.run(service.list_alerts())
