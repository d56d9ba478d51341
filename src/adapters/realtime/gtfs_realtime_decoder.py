from __future__ import annotations

from google.transit import gtfs_realtime_pb2

from src.domain.models import AlertEntity, DecodedFeed, StopTimeUpdate, TripUpdate


def decode_feed_message(content: bytes) -> DecodedFeed:
    """Decode a GTFS-Realtime FeedMessage into trip updates and alerts.

    Raises google.protobuf.message.DecodeError on malformed payloads.
    """

    feed = gtfs_realtime_pb2.FeedMessage()
    feed.ParseFromString(content)

    trip_updates: list[TripUpdate] = []
    alerts: list[AlertEntity] = []

    for ent in feed.entity:
        if ent.HasField("trip_update"):
            trip = _decode_trip_update(ent.trip_update)
            if trip is not None:
                trip_updates.append(trip)
        if ent.HasField("alert"):
            alerts.append(_decode_alert(ent.id, ent.alert))

    return DecodedFeed(trip_updates=tuple(trip_updates), alerts=tuple(alerts))


def _event_time(stu, name: str) -> int | None:
    # proto2 leaves unset times at 0; treat that as absent.
    if not stu.HasField(name):
        return None
    event = getattr(stu, name)
    return int(event.time) if event.time else None


def _decode_trip_update(tu) -> TripUpdate | None:
    if not tu.stop_time_update:
        return None

    updates = tuple(
        StopTimeUpdate(
            stop_id=stu.stop_id,
            arrival_s=_event_time(stu, "arrival"),
            departure_s=_event_time(stu, "departure"),
        )
        for stu in tu.stop_time_update
    )

    return TripUpdate(
        route_id=tu.trip.route_id or "Unknown",
        stop_time_updates=updates,
        trip_id=tu.trip.trip_id or None,
    )


def _translated_text(ts) -> str:
    """Plain English translation if present, else the first one."""

    translations = list(ts.translation)
    if not translations:
        return ""
    for t in translations:
        if t.language in ("en", ""):
            return t.text
    return translations[0].text


def _decode_alert(entity_id: str, alert) -> AlertEntity:
    route_ids: list[str] = []
    for informed in alert.informed_entity:
        route_id = informed.route_id
        if not route_id and informed.HasField("trip"):
            route_id = informed.trip.route_id
        if route_id:
            route_ids.append(route_id)

    start = end = None
    if alert.active_period:
        period = alert.active_period[0]
        start = int(period.start) if period.start else None
        end = int(period.end) if period.end else None

    return AlertEntity(
        entity_id=entity_id,
        route_ids=tuple(route_ids),
        header_text=_translated_text(alert.header_text),
        description_text=_translated_text(alert.description_text),
        active_period_start_s=start,
        active_period_end_s=end,
    )
