from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

SHUTTLE_ROUTES: frozenset[str] = frozenset({"S", "GS", "FS", "H"})


@dataclass(frozen=True, slots=True)
class TransitLookups:
    """Static tables used to interpret realtime feeds.

    - stop_names: catalog stop id (no direction suffix) -> display name
    - route_termini: route id -> {"Uptown": name, "Downtown": name}
    - combined_stations: stop id -> other stop ids in the same complex
    """

    stop_names: Mapping[str, str] = field(default_factory=dict)
    route_termini: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    combined_stations: Mapping[str, frozenset[str]] = field(default_factory=dict)
    shuttle_routes: frozenset[str] = SHUTTLE_ROUTES
