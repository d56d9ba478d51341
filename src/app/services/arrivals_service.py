from __future__ import annotations

import time
from dataclasses import dataclass

from src.app.ports.output import IRealtimeFeedProvider, IStationRepository
from src.domain.algorithms.arrivals import STALE_TOLERANCE_S, resolve_arrivals
from src.domain.exceptions import StationNotFound
from src.domain.models import Arrival, FeedResult, Station, TransitLookups


@dataclass(frozen=True, slots=True)
class ArrivalsResult:
    station: Station
    arrivals: tuple[Arrival, ...]
    feeds: tuple[FeedResult, ...]

    @property
    def failed_feeds(self) -> tuple[FeedResult, ...]:
        return tuple(f for f in self.feeds if not f.ok)


@dataclass(slots=True)
class ArrivalsService:
    """Upcoming arrivals for a station across all realtime feeds.

    Unreachable feeds just contribute nothing; they are listed in
    ArrivalsResult.feeds rather than raised.
    """

    station_repository: IStationRepository
    feed_provider: IRealtimeFeedProvider
    lookups: TransitLookups
    stale_tolerance_s: int = STALE_TOLERANCE_S

    async def get_arrivals(
        self, *, station_id: str, now_s: float | None = None
    ) -> ArrivalsResult:
        station = self.station_repository.get_station(station_id)
        if station is None:
            raise StationNotFound(station_id)

        if now_s is None:
            now_s = time.time()

        feeds = await self.feed_provider.fetch_trip_feeds()
        arrivals = resolve_arrivals(
            station.id,
            (f.feed for f in feeds if f.ok),
            self.lookups,
            now_s=now_s,
            stale_tolerance_s=self.stale_tolerance_s,
        )
        return ArrivalsResult(station=station, arrivals=arrivals, feeds=feeds)
