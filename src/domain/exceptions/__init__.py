from .transit import (
    StationNotFound,
    TransitError,
    UpstreamAlertsFailure,
    UpstreamFeedFailure,
)

__all__ = [
    "StationNotFound",
    "TransitError",
    "UpstreamAlertsFailure",
    "UpstreamFeedFailure",
]
