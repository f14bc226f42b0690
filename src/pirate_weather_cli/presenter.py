from datetime import datetime, timezone
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pirate_weather_cli.models import AddressInfo, ForecastResult

MISSING = "n/a"


def _fmt(value: Optional[float], spec: str = ".2f", suffix: str = "", scale: float = 1.0) -> str:
    if value is None:
        return MISSING
    return f"{value * scale:{spec}}{suffix}"


def format_time(epoch: int, tz_name: str) -> str:
    """Render a unix timestamp in the forecast's timezone, UTC if unknown, n/a if out of range"""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        tz = timezone.utc
    try:
        return datetime.fromtimestamp(epoch, tz).strftime("%Y-%m-%d %H:%M:%S %Z")
    except (OverflowError, OSError, ValueError):
        return MISSING


def render(
    forecast: ForecastResult,
    address: Optional[AddressInfo] = None,
    address_error: Optional[str] = None,
) -> List[str]:
    """Format a forecast as display lines.

    Address lines only appear when reverse geocoding produced an address;
    a failed lookup is reported on a single line instead. Hourly and daily
    series are summarised by their length.
    """
    units = forecast.units
    now = forecast.currently
    lines = [f"Location: {forecast.latitude:.4f}, {forecast.longitude:.4f}"]

    if address is not None:
        lines.append(f"Address: {address.display_name}")
        if address.city:
            lines.append(f"City: {address.city}")
        if address.state:
            lines.append(f"State: {address.state}")
        if address.country:
            lines.append(f"Country: {address.country}")
    elif address_error:
        lines.append(f"Address unavailable: {address_error}")

    lines += [
        f"Timezone: {forecast.timezone}",
        f"Time: {format_time(now.time, forecast.timezone)}",
        f"Temperature: {_fmt(now.temperature, suffix=units.temperature_unit)}",
        f"Feels like: {_fmt(now.apparent_temperature, suffix=units.temperature_unit)}",
        f"Humidity: {_fmt(now.humidity, suffix='%', scale=100)}",
        f"Wind Speed: {_fmt(now.wind_speed, suffix=' ' + units.speed_unit)}",
        f"Wind Direction: {_fmt(now.wind_bearing, suffix='°')}",
        f"Cloud Cover: {_fmt(now.cloud_cover, suffix='%', scale=100)}",
        f"UV Index: {_fmt(now.uv_index, '.1f')}",
        f"Visibility: {_fmt(now.visibility, suffix=' ' + units.distance_unit)}",
        f"Fire Index: {_fmt(now.fire_index)}",
        f"Smoke: {_fmt(now.smoke)}",
    ]

    if forecast.alerts:
        lines += ["", "Weather Alerts:"]
        lines += [f"- {alert.title}: {alert.description}" for alert in forecast.alerts]

    if forecast.hourly and forecast.hourly.data:
        lines += ["", f"Hourly forecast available for the next {len(forecast.hourly.data)} hours"]

    if forecast.daily and forecast.daily.data:
        lines += ["", f"Daily forecast available for the next {len(forecast.daily.data)} days"]

    return lines
