from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable

from src.domain.models import AlertEntity, AlertType, ServiceAlert

_SUBWAY_ROUTE_RE = re.compile(r"^[1-7A-Z]{1,2}X?$")
_SUBWAY_ROUTE_ALLOWLIST = frozenset({"FS", "GS", "H", "SI", "SIR"})

# Fixed ranking used only for ordering; not MTA's own severity.
SEVERITY_BY_TYPE: dict[AlertType, int] = {
    AlertType.SUSPENDED: 39,
    AlertType.SEVERE_DELAYS: 35,
    AlertType.DELAYS: 22,
    AlertType.SERVICE_CHANGE: 20,
    AlertType.SLOW_SPEEDS: 16,
    AlertType.PLANNED_WORK: 15,
    AlertType.SERVICE_ALERT: 10,
}


def is_subway_route(route_id: str) -> bool:
    return route_id in _SUBWAY_ROUTE_ALLOWLIST or bool(
        _SUBWAY_ROUTE_RE.match(route_id)
    )


def classify_alert_type(header_text: str) -> AlertType:
    """Map a free-text alert header onto an AlertType (first match wins)."""

    text = header_text.lower()
    if (
        "severe delay" in text
        or "severely delayed" in text
        or ("delay" in text and "severely" in text)
    ):
        return AlertType.SEVERE_DELAYS
    if "delay" in text:
        return AlertType.DELAYS
    if "suspend" in text:
        return AlertType.SUSPENDED
    if "planned work" in text:
        return AlertType.PLANNED_WORK
    if "service change" in text:
        return AlertType.SERVICE_CHANGE
    if "slow" in text:
        return AlertType.SLOW_SPEEDS
    return AlertType.SERVICE_ALERT


def _route_variants(route_id: str) -> set[str]:
    # Express variants ("6X") share alerts with the local route.
    variants = {route_id}
    if len(route_id) > 1 and route_id.endswith("X"):
        variants.add(route_id[:-1])
    return variants


def _to_datetime(epoch_s: int | None) -> datetime | None:
    if epoch_s is None:
        return None
    return datetime.fromtimestamp(epoch_s, tz=timezone.utc)


def build_service_alerts(
    entities: Iterable[AlertEntity], *, route_id: str | None = None
) -> tuple[ServiceAlert, ...]:
    """Classify alert entities and fan them out into one record per subway route.

    If route_id is given, only entities naming that route (or its local
    variant) are kept. Result is sorted by descending severity.
    """

    wanted = _route_variants(route_id) if route_id else None

    out: list[ServiceAlert] = []
    for entity in entities:
        if wanted is not None and wanted.isdisjoint(entity.route_ids):
            continue

        routes = [r for r in dict.fromkeys(entity.route_ids) if is_subway_route(r)]
        if not routes:
            continue
        if not entity.header_text and not entity.description_text:
            continue

        alert_type = classify_alert_type(entity.header_text)
        severity = SEVERITY_BY_TYPE[alert_type]
        start = _to_datetime(entity.active_period_start_s)
        end = _to_datetime(entity.active_period_end_s)

        for rid in routes:
            out.append(
                ServiceAlert(
                    id=f"{entity.entity_id}-{rid}",
                    route_id=rid,
                    alert_type=alert_type,
                    header_text=entity.header_text,
                    description_text=entity.description_text,
                    severity=severity,
                    active_period_start=start,
                    active_period_end=end,
                )
            )

    out.sort(key=lambda a: a.severity, reverse=True)
    return tuple(out)
