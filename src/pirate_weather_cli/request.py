import logging
import re
from datetime import date
from typing import Optional

from pirate_weather_cli.errors import BadTimestamp
from pirate_weather_cli.models import Coordinates, RequestMode, UnitSystem, WeatherRequest

logger = logging.getLogger("pirate_weather.request")

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def normalize_units(units_raw: Optional[str]) -> UnitSystem:
    """Map user input to a unit system, defaulting to SI"""
    value = (units_raw or "").strip().lower()
    try:
        return UnitSystem(value)
    except ValueError:
        if value:
            logger.warning(f"Unknown unit system {units_raw!r}, using si")
        return UnitSystem.SI


def parse_date(value: Optional[str]) -> date:
    """Parse a strict YYYY-MM-DD calendar date"""
    text = (value or "").strip()
    if not DATE_PATTERN.fullmatch(text):
        raise BadTimestamp(value)
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise BadTimestamp(value) from e


def build_request(
    coords: Coordinates,
    mode: RequestMode,
    units_raw: Optional[str],
    timestamp: Optional[str] = None,
) -> WeatherRequest:
    """Build the descriptor for one weather API call.

    Unknown unit strings fall back to SI. Historical requests need a valid
    YYYY-MM-DD date, otherwise BadTimestamp is raised. The timestamp is
    ignored for current forecasts.
    """
    units = normalize_units(units_raw)
    at = parse_date(timestamp) if mode is RequestMode.HISTORICAL else None
    return WeatherRequest(coordinates=coords, mode=mode, units=units, at=at)
