from __future__ import annotations

from typing import Callable, Iterable

import pytest
from google.transit import gtfs_realtime_pb2

TripSpec = tuple[str, Iterable[tuple[str, int | None, int | None]]]
AlertSpec = tuple[str, Iterable[str], str, str]


def build_feed_bytes(
    trips: Iterable[TripSpec] = (), alerts: Iterable[AlertSpec] = ()
) -> bytes:
    """Serialize a GTFS-Realtime FeedMessage.

    trips: (route_id, [(stop_id, arrival_s, departure_s), ...])
    alerts: (entity_id, route_ids, header, description)
    """

    msg = gtfs_realtime_pb2.FeedMessage()
    msg.header.gtfs_realtime_version = "2.0"

    for i, (route_id, stops) in enumerate(trips):
        ent = msg.entity.add()
        ent.id = f"trip-{i}"
        ent.trip_update.trip.route_id = route_id
        ent.trip_update.trip.trip_id = f"T{i}"
        for stop_id, arr, dep in stops:
            stu = ent.trip_update.stop_time_update.add()
            stu.stop_id = stop_id
            if arr is not None:
                stu.arrival.time = arr
            if dep is not None:
                stu.departure.time = dep

    for entity_id, route_ids, header, description in alerts:
        ent = msg.entity.add()
        ent.id = entity_id
        for rid in route_ids:
            ent.alert.informed_entity.add().route_id = rid
        if header:
            ent.alert.header_text.translation.add(text=header, language="en")
        if description:
            ent.alert.description_text.translation.add(text=description, language="en")

    return msg.SerializeToString()


@pytest.fixture
def feed_bytes() -> Callable[..., bytes]:
    return build_feed_bytes
