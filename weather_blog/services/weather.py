"""Open-Meteo current-conditions collection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from weather_blog.core.config import Settings
from weather_blog.core.locations import LocationSpec
from weather_blog.models import ObservationRecord
from weather_blog.services.errors import CollectionError

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m"
UNAVAILABLE_CONDITION = "Not available"

# WMO weather interpretation codes
WEATHER_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    95: "Slight/moderate thunderstorm",
}


def describe_weather_code(code: Any) -> str:
    """Translate a WMO code to text; unknown or malformed codes map to the sentinel."""

    if isinstance(code, bool):
        return UNAVAILABLE_CONDITION
    try:
        numeric = float(code)
    except (TypeError, ValueError):
        return UNAVAILABLE_CONDITION
    if not numeric.is_integer():
        return UNAVAILABLE_CONDITION
    return WEATHER_DESCRIPTIONS.get(int(numeric), UNAVAILABLE_CONDITION)


def format_measurement(value: Any, unit: str) -> str:
    """Render a reading with its unit suffix, dropping a redundant ``.0``."""

    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{unit}"


class WeatherService:
    """Fetch current conditions for an ordered list of locations."""

    def __init__(self, client: httpx.Client, config: Settings) -> None:
        self.client = client
        self.timeout = config.weather_api_timeout

    def collect(self, locations: Sequence[LocationSpec]) -> list[ObservationRecord]:
        """Return one record per location, in input order.

        Any failed location aborts the whole collection.
        """

        logger.info("Collecting current weather for %d locations", len(locations))
        records = [self.fetch_observation(location) for location in locations]
        logger.info("Collected %d weather observations", len(records))
        return records

    def fetch_observation(self, location: LocationSpec) -> ObservationRecord:
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": CURRENT_FIELDS,
            "forecast_days": 1,
        }
        try:
            logger.debug("Fetching Open-Meteo weather for %s", location.name)
            response = self.client.get(OPEN_METEO_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Open-Meteo error response for %s: %s %s",
                location.name,
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise CollectionError(
                f"Weather request for {location.name} failed with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Failed to fetch Open-Meteo weather for %s: %s", location.name, exc)
            raise CollectionError(f"Weather request for {location.name} failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Open-Meteo returned invalid JSON for %s: %s", location.name, response.text[:500])
            raise CollectionError(f"Weather response for {location.name} was not valid JSON") from exc

        return self._parse_current(location.name, payload)

    def _parse_current(self, city: str, payload: Any) -> ObservationRecord:
        current = payload.get("current") if isinstance(payload, dict) else None
        if not isinstance(current, dict):
            logger.error("Open-Meteo response for %s has no current block: %s", city, str(payload)[:500])
            raise CollectionError(f"Weather response for {city} has no current conditions")

        missing = [
            key
            for key in ("temperature_2m", "relative_humidity_2m", "weather_code", "wind_speed_10m")
            if key not in current
        ]
        if missing:
            logger.error("Open-Meteo response for %s is missing %s", city, ", ".join(missing))
            raise CollectionError(f"Weather response for {city} is missing {', '.join(missing)}")

        invalid = [
            key
            for key in ("temperature_2m", "relative_humidity_2m", "wind_speed_10m")
            if isinstance(current[key], bool) or not isinstance(current[key], (int, float))
        ]
        if invalid:
            logger.error("Open-Meteo response for %s has non-numeric %s: %s", city, ", ".join(invalid), current)
            raise CollectionError(f"Weather response for {city} has non-numeric {', '.join(invalid)}")

        return ObservationRecord(
            city=city,
            temperature=format_measurement(current["temperature_2m"], "°C"),
            humidity=format_measurement(current["relative_humidity_2m"], "%"),
            wind_speed=format_measurement(current["wind_speed_10m"], " km/h"),
            condition=describe_weather_code(current["weather_code"]),
        )


__all__ = [
    "WeatherService",
    "describe_weather_code",
    "format_measurement",
    "OPEN_METEO_URL",
    "UNAVAILABLE_CONDITION",
    "WEATHER_DESCRIPTIONS",
]
