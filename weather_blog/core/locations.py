"""Location list loader for the weather table."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from weather_blog.services.errors import ConfigurationError

logger = logging.getLogger(__name__)


class LocationSpec(BaseModel):
    """A named place queried once per run."""

    name: str = Field(min_length=1)
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class LocationsFileConfig(BaseModel):
    """Representation of config/locations.yml."""

    locations: list[LocationSpec] = Field(min_length=1)


DEFAULT_LOCATIONS: tuple[LocationSpec, ...] = (
    LocationSpec(name="Delhi", latitude=28.61, longitude=77.23),
    LocationSpec(name="Mumbai", latitude=19.07, longitude=72.88),
    LocationSpec(name="Kolkata", latitude=22.57, longitude=88.36),
    LocationSpec(name="Chennai", latitude=13.08, longitude=80.27),
    LocationSpec(name="Bengaluru", latitude=12.97, longitude=77.59),
    LocationSpec(name="Hyderabad", latitude=17.38, longitude=78.48),
    LocationSpec(name="Jaipur", latitude=26.91, longitude=75.79),
)


def load_locations(path: str | Path | None = None) -> list[LocationSpec]:
    """Load the ordered location list, falling back to the built-in cities."""

    if not path:
        return list(DEFAULT_LOCATIONS)

    cfg_path = Path(path)
    if not cfg_path.exists():
        logger.info("Locations file %s not found, using %d built-in cities", cfg_path, len(DEFAULT_LOCATIONS))
        return list(DEFAULT_LOCATIONS)

    try:
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        parsed = LocationsFileConfig.model_validate(data)
    except (yaml.YAMLError, ValidationError) as exc:
        logger.error("Invalid locations file %s: %s", cfg_path, exc)
        raise ConfigurationError(f"Invalid locations file {cfg_path}: {exc}") from exc

    logger.info("Loaded %d locations from %s", len(parsed.locations), cfg_path)
    return parsed.locations


__all__ = ["LocationSpec", "DEFAULT_LOCATIONS", "load_locations"]
