from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AlertType(str, Enum):
    """Alert categories; values are the labels the display client matches on."""

    SEVERE_DELAYS = "Severe Delays"
    DELAYS = "Delays"
    SUSPENDED = "Suspended"
    PLANNED_WORK = "Planned Work"
    SERVICE_CHANGE = "Service Change"
    SLOW_SPEEDS = "Slow Speeds"
    SERVICE_ALERT = "Service Alert"


@dataclass(frozen=True, slots=True)
class ServiceAlert:
    id: str
    route_id: str
    alert_type: AlertType
    header_text: str
    description_text: str
    severity: int
    active_period_start: datetime | None = None
    active_period_end: datetime | None = None
