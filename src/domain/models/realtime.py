from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StopTimeUpdate:
    stop_id: str
    arrival_s: int | None = None
    departure_s: int | None = None

    @property
    def effective_time_s(self) -> int | None:
        if self.arrival_s is not None:
            return self.arrival_s
        return self.departure_s


@dataclass(frozen=True, slots=True)
class TripUpdate:
    """A train's remaining stops, in physical stop order."""

    route_id: str
    stop_time_updates: tuple[StopTimeUpdate, ...]
    trip_id: str | None = None

    @property
    def terminus(self) -> StopTimeUpdate | None:
        return self.stop_time_updates[-1] if self.stop_time_updates else None


@dataclass(frozen=True, slots=True)
class AlertEntity:
    entity_id: str
    route_ids: tuple[str, ...]
    header_text: str = ""
    description_text: str = ""
    active_period_start_s: int | None = None
    active_period_end_s: int | None = None


@dataclass(frozen=True, slots=True)
class DecodedFeed:
    trip_updates: tuple[TripUpdate, ...] = ()
    alerts: tuple[AlertEntity, ...] = ()


@dataclass(frozen=True, slots=True)
class FeedResult:
    """Outcome of fetching one upstream feed; failed feeds carry an empty feed."""

    url: str
    ok: bool
    feed: DecodedFeed = DecodedFeed()
    error: str | None = None
