from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def iso_utc(value: datetime) -> str:
    """ISO-8601 in UTC with milliseconds and a Z suffix (JS toISOString)."""

    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StationSchema(CamelSchema):
    id: str
    name: str
    line: str
    lines: list[str]
    lat: float | None = None
    lng: float | None = None


class ArrivalSchema(CamelSchema):
    route_id: str
    destination: str
    arrival_time: str
    direction: Literal["Uptown", "Downtown"]
    status: str


class ServiceAlertSchema(CamelSchema):
    id: str
    route_id: str
    alert_type: str
    header_text: str
    description_text: str
    active_period_start: str | None = None
    active_period_end: str | None = None
    severity: int


class MessageSchema(BaseModel):
    message: str
