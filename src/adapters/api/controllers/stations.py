from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_arrivals_service, get_station_repository
from src.adapters.api.schemas.transit import (
    ArrivalSchema,
    MessageSchema,
    StationSchema,
    iso_utc,
)
from src.app.ports.output import IStationRepository
from src.app.services.arrivals_service import ArrivalsService

router = APIRouter(prefix="/api/stations", tags=["stations"])

logger = logging.getLogger(__name__)


@router.get("", response_model=list[StationSchema])
def list_stations(
    repository: IStationRepository = Depends(get_station_repository),
) -> list[StationSchema]:
    return [
        StationSchema(
            id=s.id,
            name=s.name,
            line=s.line,
            lines=sorted(s.lines),
            lat=s.lat,
            lng=s.lng,
        )
        for s in repository.list_stations()
    ]


@router.get(
    "/{station_id}/arrivals",
    response_model=list[ArrivalSchema],
    responses={404: {"model": MessageSchema}},
)
async def get_arrivals(
    station_id: str,
    service: ArrivalsService = Depends(get_arrivals_service),
) -> list[ArrivalSchema]:
    result = await service.get_arrivals(station_id=station_id)

    if result.failed_feeds:
        logger.info(
            "Arrivals for %s built without %d feed(s): %s",
            station_id,
            len(result.failed_feeds),
            ", ".join(f.url for f in result.failed_feeds),
        )

    return [
        ArrivalSchema(
            route_id=a.route_id,
            destination=a.destination,
            arrival_time=iso_utc(a.arrival_time),
            direction=a.direction.value,
            status=a.status,
        )
        for a in result.arrivals
    ]
