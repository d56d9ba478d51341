from __future__ import annotations

from typing import Iterable, Mapping

from src.domain.models import Direction

DIRECTION_SUFFIXES = ("N", "S")


def stop_ids_to_query(
    station_id: str, combined_stations: Mapping[str, Iterable[str]]
) -> frozenset[str]:
    """The station id plus every platform id sharing its complex."""

    return frozenset({station_id, *combined_stations.get(station_id, ())})


def matches_station(feed_stop_id: str, query: Iterable[str]) -> bool:
    # Feed stop ids carry a direction suffix ("127N") the catalog ids lack.
    return any(feed_stop_id.startswith(stop_id) for stop_id in query)


def direction_for_stop_id(stop_id: str) -> Direction:
    return Direction.UPTOWN if stop_id[-1:] == "N" else Direction.DOWNTOWN


def strip_direction_suffix(stop_id: str) -> str:
    if len(stop_id) > 1 and stop_id[-1] in DIRECTION_SUFFIXES:
        return stop_id[:-1]
    return stop_id


def validate_combined_stations(
    combined_stations: Mapping[str, Iterable[str]],
) -> dict[str, frozenset[str]]:
    """Normalize the equivalence table and check every mapping is mutual.

    Raises ValueError naming the first one-way entry found.
    """

    normalized = {k: frozenset(v) - {k} for k, v in combined_stations.items()}
    for stop_id, others in normalized.items():
        for other in sorted(others):
            if stop_id not in normalized.get(other, frozenset()):
                raise ValueError(
                    f"Combined station {stop_id!r} -> {other!r} has no reverse mapping"
                )
    return normalized
