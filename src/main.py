from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.alerts import router as alerts_router
from src.adapters.api.controllers.stations import router as stations_router
from src.adapters.mta import MtaRuntimeConfig, env_bool
from src.adapters.persistence import (
    HttpStationCatalogRepository,
    JsonLookupRepository,
)
from src.adapters.realtime.http_gtfs_realtime_feed_provider import (
    HttpGtfsRealtimeFeedProvider,
)
from src.domain.exceptions import StationNotFound, UpstreamAlertsFailure

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg = MtaRuntimeConfig.from_env()

    stations = HttpStationCatalogRepository(
        stations_url=cfg.stations_url or "", data_path=cfg.data_path
    )
    await stations.initialize()

    app.state.station_repository = stations
    app.state.lookups = JsonLookupRepository(base_path=cfg.data_path).load_lookups()
    app.state.feed_provider = HttpGtfsRealtimeFeedProvider(
        feed_urls=cfg.feed_urls,
        alerts_url=cfg.alerts_url,
        api_key=cfg.api_key,
        timeout_s=cfg.timeout_s,
    )
    if not cfg.api_key:
        logging.getLogger(__name__).info("MTA_API_KEY not set; fetching anonymously")
    yield


app = FastAPI(title="Subway Arrivals", lifespan=lifespan)
app.include_router(stations_router)
app.include_router(alerts_router)


@app.exception_handler(StationNotFound)
async def station_not_found_handler(
    request: Request, exc: StationNotFound
) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "Station not found"})


@app.exception_handler(UpstreamAlertsFailure)
async def alerts_unavailable_handler(
    request: Request, exc: UpstreamAlertsFailure
) -> JSONResponse:
    return JSONResponse(
        status_code=502, content={"message": "Failed to fetch service alerts"}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report unexpected failures as JSON without leaking internals.

    Set TRANSIT_REVEAL_ERRORS=1 to include the exception text while debugging.
    """

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if env_bool("TRANSIT_REVEAL_ERRORS"):
        message = str(exc) or exc.__class__.__name__
    else:
        message = "Failed to fetch real-time data"

    return JSONResponse(status_code=500, content={"message": message})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
