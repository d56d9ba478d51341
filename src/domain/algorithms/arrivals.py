from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from src.domain.models import Arrival, DecodedFeed, TransitLookups

from .destinations import resolve_destination
from .stop_identity import direction_for_stop_id, matches_station, stop_ids_to_query

# Predictions up to this far in the past are still shown (feed/clock skew).
STALE_TOLERANCE_S = 60


def resolve_arrivals(
    station_id: str,
    feeds: Iterable[DecodedFeed],
    lookups: TransitLookups,
    *,
    now_s: float,
    stale_tolerance_s: int = STALE_TOLERANCE_S,
) -> tuple[Arrival, ...]:
    """Collect upcoming arrivals at a station (and its complex) across feeds.

    Output is sorted by arrival time. A prediction whose effective time is at
    or before `now_s - stale_tolerance_s` is dropped.
    """

    query = stop_ids_to_query(station_id, lookups.combined_stations)
    cutoff = now_s - stale_tolerance_s

    out: list[Arrival] = []
    for feed in feeds:
        for trip in feed.trip_updates:
            for update in trip.stop_time_updates:
                if not update.stop_id or not matches_station(update.stop_id, query):
                    continue

                direction = direction_for_stop_id(update.stop_id)

                when = update.effective_time_s
                if when is None or when <= cutoff:
                    continue

                out.append(
                    Arrival(
                        route_id=trip.route_id,
                        destination=resolve_destination(trip, direction, lookups),
                        arrival_time=datetime.fromtimestamp(when, tz=timezone.utc),
                        direction=direction,
                    )
                )

    out.sort(key=lambda a: a.arrival_time)
    return tuple(out)
