import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from pirate_weather_cli.errors import TransportError
from pirate_weather_cli.models import Coordinates, ForecastResult, RequestMode, UnitSystem, WeatherRequest

logger = logging.getLogger("pirate_weather.weather")


class WeatherClient:
    """Client for the Pirate Weather forecast and time machine endpoints"""

    FORECAST_URL = "https://api.pirateweather.net/forecast"
    TIMEMACHINE_URL = "https://timemachine.pirateweather.net/forecast"

    def __init__(
        self,
        api_key: str,
        http: httpx.Client,
        forecast_url: str = FORECAST_URL,
        timemachine_url: str = TIMEMACHINE_URL,
    ):
        if not api_key:
            raise ValueError("An API key is required")
        self._api_key = api_key
        self.http = http
        self.forecast_url = forecast_url.rstrip("/")
        self.timemachine_url = timemachine_url.rstrip("/")

    def fetch(self, request: WeatherRequest) -> ForecastResult:
        if request.mode is RequestMode.HISTORICAL:
            return self.fetch_historical(request.coordinates, request.at, request.units)
        return self.fetch_current(request.coordinates, request.units)

    def fetch_current(self, coords: Coordinates, units: UnitSystem) -> ForecastResult:
        """Get the current forecast for a location"""
        url = f"{self.forecast_url}/{self._api_key}/{coords.latitude},{coords.longitude}"
        return self._get(url, units, "forecast")

    def fetch_historical(self, coords: Coordinates, at: date, units: UnitSystem) -> ForecastResult:
        """Get conditions for a past day, requested at midnight UTC"""
        timestamp = int(datetime.combine(at, time(0, 0), tzinfo=timezone.utc).timestamp())
        url = f"{self.timemachine_url}/{self._api_key}/{coords.latitude},{coords.longitude},{timestamp}"
        return self._get(url, units, "historical data")

    def _redact(self, url: str) -> str:
        return url.replace(self._api_key, "***")

    def _get(self, url: str, units: UnitSystem, what: str) -> ForecastResult:
        logger.info(f"Requesting {what}: {self._redact(url)} (units={units.value})")
        try:
            response = self.http.get(url, params={"units": units.value})
            response.raise_for_status()
            payload: Dict[str, Any] = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP {e.response.status_code} from weather API")
            raise TransportError(
                f"Error fetching {what}: HTTP {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Request to weather API failed: {type(e).__name__}")
            raise TransportError(f"Error fetching {what}: {self._redact(str(e)) or type(e).__name__}") from e
        except ValueError as e:
            raise TransportError(f"Error fetching {what}: response is not valid JSON") from e

        if not isinstance(payload, dict):
            raise TransportError(f"Error fetching {what}: unexpected response payload")

        try:
            forecast = ForecastResult.model_validate({**payload, "units": units})
        except ValidationError as e:
            logger.debug(f"Invalid weather payload: {e}")
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise TransportError(f"Error fetching {what}: malformed response ({fields})") from e

        logger.info(f"Received {what} for {forecast.latitude}, {forecast.longitude}")
        return forecast
