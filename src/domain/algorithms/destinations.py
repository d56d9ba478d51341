from __future__ import annotations

from typing import Callable, Sequence

from src.domain.models import Direction, TransitLookups, TripUpdate

from .stop_identity import strip_direction_suffix

DestinationResolver = Callable[[TripUpdate, Direction, TransitLookups], "str | None"]


def shuttle_destination(
    trip: TripUpdate, direction: Direction, lookups: TransitLookups
) -> str | None:
    # Shuttles bounce between two termini; the direction alone names the end.
    if trip.route_id not in lookups.shuttle_routes:
        return None
    termini = lookups.route_termini.get(trip.route_id) or {}
    return termini.get(direction.value) or direction.value


def terminus_destination(
    trip: TripUpdate, direction: Direction, lookups: TransitLookups
) -> str | None:
    terminus = trip.terminus
    if terminus is None or not terminus.stop_id:
        return None
    return lookups.stop_names.get(strip_direction_suffix(terminus.stop_id))


def route_terminal_destination(
    trip: TripUpdate, direction: Direction, lookups: TransitLookups
) -> str | None:
    termini = lookups.route_termini.get(trip.route_id)
    if not termini:
        return None
    return termini.get(direction.value)


DEFAULT_RESOLVERS: tuple[DestinationResolver, ...] = (
    shuttle_destination,
    terminus_destination,
    route_terminal_destination,
)


def resolve_destination(
    trip: TripUpdate,
    direction: Direction,
    lookups: TransitLookups,
    resolvers: Sequence[DestinationResolver] = DEFAULT_RESOLVERS,
) -> str:
    """First name any resolver produces, else the direction label."""

    for resolver in resolvers:
        name = resolver(trip, direction, lookups)
        if name:
            return name
    return direction.value
