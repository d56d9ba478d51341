from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import httpx

from src.adapters.mta import MtaRuntimeConfig
from src.app.ports.output import IStationRepository
from src.domain.models import Station

from .json_lookup_repository import read_json

logger = logging.getLogger(__name__)

# Line guesses for stations missing from line_mappings.json, by id prefix.
_PREFIX_LINES: tuple[tuple[str, str], ...] = (
    ("A", "A"),
    ("H", "A"),
    ("B", "B D"),
    ("D", "B D F M"),
    ("F", "F"),
    ("G", "G"),
    ("J", "J Z"),
    ("L", "L"),
    ("M", "M"),
    ("N", "N"),
    ("Q", "N Q"),
    ("R", "N R W"),
    ("S", "S"),
)

# ...and by numeric id range, for the numbered lines.
_RANGE_LINES: tuple[tuple[int, int, str], ...] = (
    (100, 200, "1"),
    (200, 300, "2 3"),
    (400, 500, "4"),
    (500, 600, "5"),
    (600, 700, "6"),
    (700, 800, "7"),
    (900, 1000, "S"),
)


def _split_lines(raw: str) -> frozenset[str]:
    return frozenset(raw.split())


def guess_lines(station_id: str, line_mappings: Mapping[str, str]) -> frozenset[str]:
    mapped = line_mappings.get(station_id)
    if mapped:
        return _split_lines(mapped)

    for prefix, lines in _PREFIX_LINES:
        if station_id.startswith(prefix):
            return _split_lines(lines)

    if station_id.isdigit():
        num = int(station_id)
        for lo, hi, lines in _RANGE_LINES:
            if lo <= num < hi:
                return _split_lines(lines)

    return frozenset()


def _coord(location: Any, index: int) -> float | None:
    try:
        value = float(location[index])
    except (TypeError, ValueError, IndexError, KeyError):
        return None
    # 0.0 marks a missing coordinate in the upstream data.
    return value or None


@dataclass(slots=True)
class HttpStationCatalogRepository(IStationRepository):
    """Station catalog built once from the community MTAPI stations.json.

    Lines come from line_mappings.json (with id-based guesses as fallback),
    names from station_catalog.json overrides, and extra platform groups
    ("split stations") are added under their complex's coordinates.
    If the download fails the bundled fallback list is used.

    Unset fields are filled from MtaRuntimeConfig.from_env().
    """

    stations_url: str | None = None
    data_path: str | Path | None = None
    timeout_s: float = 10.0
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    _stations: dict[str, Station] = field(default_factory=dict, init=False, repr=False)
    _initialized: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        cfg = MtaRuntimeConfig.from_env()
        if self.stations_url is None:
            self.stations_url = cfg.stations_url
        if self.data_path is None:
            self.data_path = cfg.data_path

    async def initialize(self) -> None:
        if self._initialized:
            return

        base = Path(self.data_path or ".")
        line_mappings: dict[str, str] = read_json(base / "line_mappings.json")
        catalog: dict[str, Any] = read_json(base / "station_catalog.json")

        stations: dict[str, Station] = {}
        if self.stations_url:
            try:
                raw = await self._download()
                stations = self._build(raw, line_mappings, catalog)
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning(
                    "Failed to load stations from %s, using fallback: %s",
                    self.stations_url,
                    exc,
                )

        if not stations:
            stations = {
                s.id: s
                for s in (
                    Station(
                        id=str(row["id"]),
                        name=str(row["name"]),
                        lines=_split_lines(str(row.get("lines") or "")),
                        lat=row.get("lat"),
                        lng=row.get("lng"),
                    )
                    for row in catalog.get("fallback_stations", [])
                )
            }

        self._stations = stations
        self._initialized = True
        logger.info("Initialized %d stations", len(stations))

    async def _download(self) -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self.timeout_s, transport=self.transport
        ) as client:
            resp = await client.get(str(self.stations_url))
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, dict):
            raise ValueError("stations.json root must be a mapping")
        return data

    @staticmethod
    def _build(
        raw: Mapping[str, Any],
        line_mappings: Mapping[str, str],
        catalog: Mapping[str, Any],
    ) -> dict[str, Station]:
        name_overrides: Mapping[str, str] = catalog.get("name_overrides", {})
        split_stations: Mapping[str, list[dict[str, str]]] = catalog.get(
            "split_stations", {}
        )

        out: dict[str, Station] = {}
        for station_id, entry in raw.items():
            if not isinstance(entry, dict):
                continue
            name = str(entry.get("name") or station_id)
            location = entry.get("location") or ()
            lat = _coord(location, 0)
            lng = _coord(location, 1)

            out[station_id] = Station(
                id=station_id,
                name=name_overrides.get(station_id, name),
                lines=guess_lines(station_id, line_mappings),
                lat=lat,
                lng=lng,
            )

            for split in split_stations.get(name, ()):
                split_id = split["id"]
                if split_id in out:
                    continue
                out[split_id] = Station(
                    id=split_id,
                    name=split.get("name") or name,
                    lines=_split_lines(split.get("lines", "")),
                    lat=lat,
                    lng=lng,
                )

        return out

    def get_station(self, station_id: str) -> Station | None:
        return self._stations.get(station_id)

    def list_stations(self) -> tuple[Station, ...]:
        return tuple(sorted(self._stations.values(), key=lambda s: (s.name, s.id)))
