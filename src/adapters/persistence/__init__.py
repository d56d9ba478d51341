from .json_lookup_repository import JsonLookupRepository
from .station_catalog_repository import HttpStationCatalogRepository

__all__ = [
    "HttpStationCatalogRepository",
    "JsonLookupRepository",
]
