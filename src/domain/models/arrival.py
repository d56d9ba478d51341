from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Direction(str, Enum):
    UPTOWN = "Uptown"
    DOWNTOWN = "Downtown"


ON_TIME = "On Time"


@dataclass(frozen=True, slots=True)
class Arrival:
    route_id: str
    destination: str
    arrival_time: datetime  # timezone-aware, UTC
    direction: Direction
    status: str = ON_TIME
