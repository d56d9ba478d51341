from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Station:
    """One catalog entry (a platform group; a complex may span several)."""

    id: str
    name: str
    lines: frozenset[str] = frozenset()
    lat: float | None = None
    lng: float | None = None

    @property
    def line(self) -> str:
        return " ".join(sorted(self.lines))
