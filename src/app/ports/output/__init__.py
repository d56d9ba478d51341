from .lookup_repository import ILookupRepository
from .realtime_feed_provider import IRealtimeFeedProvider
from .station_repository import IStationRepository

__all__ = [
    "ILookupRepository",
    "IRealtimeFeedProvider",
    "IStationRepository",
]
