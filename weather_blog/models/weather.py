"""Weather observation models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ObservationRecord:
    """Current conditions for one city, units baked into each value."""

    city: str
    temperature: str
    humidity: str
    wind_speed: str
    condition: str


__all__ = ["ObservationRecord"]
