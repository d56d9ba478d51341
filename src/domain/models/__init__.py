from .alert import AlertType, ServiceAlert
from .arrival import Arrival, Direction
from .lookups import TransitLookups
from .realtime import (
    AlertEntity,
    DecodedFeed,
    FeedResult,
    StopTimeUpdate,
    TripUpdate,
)
from .station import Station

__all__ = [
    "AlertEntity",
    "AlertType",
    "Arrival",
    "DecodedFeed",
    "Direction",
    "FeedResult",
    "ServiceAlert",
    "Station",
    "StopTimeUpdate",
    "TransitLookups",
    "TripUpdate",
]
