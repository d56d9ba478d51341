from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Station


class IStationRepository(ABC):
    """Port for the read-only station catalog.

    `initialize` is awaited once at startup; lookups are synchronous after that.
    """

    @abstractmethod
    async def initialize(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_station(self, station_id: str) -> Station | None:
        raise NotImplementedError

    @abstractmethod
    def list_stations(self) -> tuple[Station, ...]:
        raise NotImplementedError
