class TransitError(Exception):
    """Base exception for realtime transit lookups."""


class StationNotFound(TransitError):
    """Raised when a requested station id is not in the catalog."""

    def __init__(self, station_id: str) -> None:
        super().__init__(f"Station not found: {station_id}")
        self.station_id = station_id


class UpstreamFeedFailure(TransitError):
    """One realtime feed could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class UpstreamAlertsFailure(UpstreamFeedFailure):
    """The single service alerts feed is unavailable."""
