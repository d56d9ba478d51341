from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# One endpoint per route family.
DEFAULT_FEED_URLS: tuple[str, ...] = (
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs",  # 1-7, S
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-ace",
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-bdfm",
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-g",
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-jz",
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-nqrw",
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-l",
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-si",
)

DEFAULT_ALERTS_URL = (
    "https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/camsys%2Fsubway-alerts"
)

DEFAULT_STATIONS_URL = (
    "https://raw.githubusercontent.com/jonthornton/MTAPI/master/data/stations.json"
)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent / "persistence" / "data"


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


@dataclass(frozen=True, slots=True)
class MtaRuntimeConfig:
    """Upstream endpoints and knobs, read from the environment.

    Env vars:
      - MTA_API_KEY: sent as `x-api-key` when set
      - MTA_FEED_URLS: comma-separated trip feed URLs (default: all subway feeds)
      - MTA_ALERTS_URL: service alerts feed URL
      - MTA_FEED_TIMEOUT_S: per-feed timeout (default 10)
      - STATIONS_URL: station catalog JSON; set to empty to use the bundled list
      - TRANSIT_DATA_PATH: directory holding the lookup JSON files
    """

    api_key: str | None
    feed_urls: tuple[str, ...]
    alerts_url: str
    timeout_s: float
    stations_url: str | None
    data_path: Path

    @staticmethod
    def from_env() -> "MtaRuntimeConfig":
        raw_urls = _env_str("MTA_FEED_URLS")
        feed_urls = (
            tuple(u.strip() for u in raw_urls.split(",") if u.strip())
            if raw_urls
            else DEFAULT_FEED_URLS
        )

        stations_url: str | None = DEFAULT_STATIONS_URL
        if "STATIONS_URL" in os.environ:
            stations_url = _env_str("STATIONS_URL")

        return MtaRuntimeConfig(
            api_key=_env_str("MTA_API_KEY"),
            feed_urls=feed_urls,
            alerts_url=_env_str("MTA_ALERTS_URL") or DEFAULT_ALERTS_URL,
            timeout_s=float(_env_str("MTA_FEED_TIMEOUT_S") or 10.0),
            stations_url=stations_url,
            data_path=Path(_env_str("TRANSIT_DATA_PATH") or DEFAULT_DATA_PATH),
        )
