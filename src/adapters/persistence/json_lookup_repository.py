from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.adapters.mta import MtaRuntimeConfig
from src.app.ports.output import ILookupRepository
from src.domain.algorithms.stop_identity import validate_combined_stations
from src.domain.models import TransitLookups

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fp:
        return json.load(fp)


@dataclass(slots=True)
class JsonLookupRepository(ILookupRepository):
    """Loads the static lookup tables from a directory of JSON files.

    Files:
      - stop_names.json: {stop_id: name}
      - route_termini.json: {route_id: {"Uptown": name, "Downtown": name}}
      - combined_stations.json: {stop_id: [other stop ids]}, must be mutual

    Defaults to TRANSIT_DATA_PATH or the JSON files shipped in persistence/data.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        if self.base_path is not None:
            return Path(self.base_path)
        return MtaRuntimeConfig.from_env().data_path

    def load_lookups(self) -> TransitLookups:
        base = self._base()

        stop_names = {
            str(k).strip(): str(v).strip()
            for k, v in read_json(base / "stop_names.json").items()
        }

        route_termini: dict[str, dict[str, str]] = {}
        for route_id, termini in read_json(base / "route_termini.json").items():
            if not isinstance(termini, dict):
                raise ValueError(f"Route termini for {route_id!r} must be a mapping")
            route_termini[str(route_id)] = {str(k): str(v) for k, v in termini.items()}

        combined_raw = read_json(base / "combined_stations.json")
        combined = validate_combined_stations(
            {str(k): [str(x) for x in v] for k, v in combined_raw.items()}
        )

        logger.info(
            "Loaded %d stop names, %d route termini, %d combined stations from %s",
            len(stop_names),
            len(route_termini),
            len(combined),
            base,
        )
        return TransitLookups(
            stop_names=stop_names,
            route_termini=route_termini,
            combined_stations=combined,
        )
