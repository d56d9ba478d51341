from __future__ import annotations

from fastapi import Depends, Request

from src.app.ports.output import IRealtimeFeedProvider, IStationRepository
from src.app.services.alerts_service import AlertsService
from src.app.services.arrivals_service import ArrivalsService
from src.domain.models import TransitLookups

# Collaborators are built once in the app lifespan and kept on app.state.


def get_station_repository(request: Request) -> IStationRepository:
    return request.app.state.station_repository


def get_feed_provider(request: Request) -> IRealtimeFeedProvider:
    return request.app.state.feed_provider


def get_lookups(request: Request) -> TransitLookups:
    return request.app.state.lookups


def get_arrivals_service(
    station_repository: IStationRepository = Depends(get_station_repository),
    feed_provider: IRealtimeFeedProvider = Depends(get_feed_provider),
    lookups: TransitLookups = Depends(get_lookups),
) -> ArrivalsService:
    return ArrivalsService(
        station_repository=station_repository,
        feed_provider=feed_provider,
        lookups=lookups,
    )


def get_alerts_service(
    feed_provider: IRealtimeFeedProvider = Depends(get_feed_provider),
) -> AlertsService:
    return AlertsService(feed_provider=feed_provider)
