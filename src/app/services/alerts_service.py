from __future__ import annotations

from dataclasses import dataclass

from src.app.ports.output import IRealtimeFeedProvider
from src.domain.algorithms.alert_classification import build_service_alerts
from src.domain.models import ServiceAlert


@dataclass(slots=True)
class AlertsService:
    """Subway service alerts, one record per affected route, most severe first.

    Raises UpstreamAlertsFailure when the alerts feed is down.
    """

    feed_provider: IRealtimeFeedProvider

    async def list_alerts(self) -> tuple[ServiceAlert, ...]:
        feed = await self.feed_provider.fetch_alerts_feed()
        return build_service_alerts(feed.alerts)

    async def list_alerts_for_route(self, *, route_id: str) -> tuple[ServiceAlert, ...]:
        feed = await self.feed_provider.fetch_alerts_feed()
        return build_service_alerts(feed.alerts, route_id=route_id)
