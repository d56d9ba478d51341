from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import DecodedFeed, FeedResult


class IRealtimeFeedProvider(ABC):
    """Port for obtaining decoded GTFS-Realtime feeds."""

    @abstractmethod
    async def fetch_trip_feeds(self) -> tuple[FeedResult, ...]:
        """Fetch every trip-update feed; failures are reported per feed."""

        raise NotImplementedError

    @abstractmethod
    async def fetch_alerts_feed(self) -> DecodedFeed:
        """Fetch the service alerts feed.

        Raises UpstreamAlertsFailure if it cannot be fetched or decoded.
        """

        raise NotImplementedError
