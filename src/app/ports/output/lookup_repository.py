from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import TransitLookups


class ILookupRepository(ABC):
    """Port for loading the static stop/route lookup tables."""

    @abstractmethod
    def load_lookups(self) -> TransitLookups:
        raise NotImplementedError
