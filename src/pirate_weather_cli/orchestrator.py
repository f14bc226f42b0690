import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional

import httpx

from pirate_weather_cli.config import Config
from pirate_weather_cli.errors import BadTimestamp, GeocodingError
from pirate_weather_cli.location import GeocodingClient, LocationResolver
from pirate_weather_cli.models import AddressInfo, WeatherQuery
from pirate_weather_cli.presenter import render
from pirate_weather_cli.request import build_request
from pirate_weather_cli.weather import WeatherClient

logger = logging.getLogger("pirate_weather.orchestrator")

DATE_FALLBACK_NOTICE = "Invalid date format. Using current date."


class Orchestrator:
    """Runs one weather lookup: resolve, build, fetch, present.

    Any stage failure propagates as a PirateWeatherError and stops the run.
    The only recoveries are the SI unit default and, for interactive
    queries, replacing an unparsable date with today.
    """

    def __init__(self, resolver: LocationResolver, weather: WeatherClient, geocoder: GeocodingClient):
        self.resolver = resolver
        self.weather = weather
        self.geocoder = geocoder

    def run(self, query: WeatherQuery) -> List[str]:
        notices: List[str] = []

        logger.info(f"Step 1: Resolving location {query.location!r}")
        coords = self.resolver.resolve(query.location)

        logger.info("Step 2: Building weather request")
        try:
            request = build_request(coords, query.mode, query.units, query.time)
        except BadTimestamp:
            if not query.fallback_to_today:
                raise
            logger.warning(f"Invalid date {query.time!r}, falling back to today")
            notices.append(DATE_FALLBACK_NOTICE)
            request = build_request(coords, query.mode, query.units, date.today().isoformat())
        logger.debug(f"Request: {request}")

        logger.info("Step 3: Fetching weather data")
        forecast = self.weather.fetch(request)

        logger.info("Step 4: Looking up address")
        address: Optional[AddressInfo] = None
        address_error: Optional[str] = None
        try:
            address = self.geocoder.reverse_geocode(forecast.latitude, forecast.longitude)
        except GeocodingError as e:
            logger.warning(f"Address lookup failed: {str(e)}")
            address_error = str(e)

        return notices + render(forecast, address, address_error)


@contextmanager
def open_orchestrator(config: Config) -> Iterator[Orchestrator]:
    """Wire the concrete clients to one HTTP session for a single run"""
    with httpx.Client(timeout=config.timeout, headers={"User-Agent": config.user_agent}) as http:
        geocoder = GeocodingClient(http, config.geocoding_url)
        weather = WeatherClient(
            config.api_key,
            http,
            forecast_url=config.forecast_url,
            timemachine_url=config.timemachine_url,
        )
        yield Orchestrator(LocationResolver(geocoder), weather, geocoder)
