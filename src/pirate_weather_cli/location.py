import logging
import math
import re
from typing import Optional

import httpx
from pydantic import ValidationError

from pirate_weather_cli.errors import GeocodingError, GeocodingFailed, InvalidGeocodeResult
from pirate_weather_cli.models import AddressInfo, Coordinates, GeocodeResult

logger = logging.getLogger("pirate_weather.location")

DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_coordinates(text: str) -> Optional[Coordinates]:
    """Parse a literal "lat,lon" string, or return None if it is not one"""
    parts = text.split(",")
    if len(parts) != 2:
        return None

    lat_text, lon_text = parts[0].strip(), parts[1].strip()
    if not (DECIMAL_PATTERN.fullmatch(lat_text) and DECIMAL_PATTERN.fullmatch(lon_text)):
        return None

    latitude = float(lat_text)
    longitude = float(lon_text)

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        return None

    return Coordinates(latitude=latitude, longitude=longitude)


class GeocodingClient:
    """Forward and reverse lookups against OpenStreetMap Nominatim"""

    def __init__(self, http: httpx.Client, base_url: str = "https://nominatim.openstreetmap.org"):
        self.http = http
        self.base_url = base_url.rstrip("/")

    def forward_geocode(self, query: str) -> GeocodeResult:
        try:
            response = self.http.get(
                f"{self.base_url}/search",
                params={"q": query, "format": "json", "limit": 1},
            )
            response.raise_for_status()

            results = response.json()
            if not results:
                raise GeocodingError(f"Location '{query}' not found")

            place = results[0]
            return GeocodeResult(
                lat=str(place["lat"]),
                lon=str(place["lon"]),
                display_name=place.get("display_name", ""),
            )

        except GeocodingError:
            raise
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Error geocoding {query}: {str(e)}")
            raise GeocodingError(f"Failed to geocode location: {str(e)}") from e

    def reverse_geocode(self, latitude: float, longitude: float) -> AddressInfo:
        try:
            response = self.http.get(
                f"{self.base_url}/reverse",
                params={"lat": latitude, "lon": longitude, "format": "json"},
            )
            response.raise_for_status()

            place = response.json()
            if "error" in place:
                raise GeocodingError(place["error"])

            address = place.get("address") or {}
            return AddressInfo(
                display_name=place["display_name"],
                city=address.get("city") or address.get("town") or address.get("village") or address.get("hamlet"),
                state=address.get("state"),
                country=address.get("country"),
            )

        except GeocodingError:
            raise
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Error reverse geocoding {latitude}, {longitude}: {str(e)}")
            raise GeocodingError(f"Failed to look up address: {str(e)}") from e


class LocationResolver:
    """Turns user supplied location text into coordinates"""

    def __init__(self, geocoder: GeocodingClient):
        self.geocoder = geocoder

    def resolve(self, raw_location: str) -> Coordinates:
        coords = parse_coordinates(raw_location)
        if coords is not None:
            logger.debug(f"Parsed literal coordinates: {coords}")
            return coords

        location = raw_location.strip()
        if not location:
            raise GeocodingFailed(raw_location, "no location given")

        logger.info(f"Geocoding '{location}'")
        try:
            result = self.geocoder.forward_geocode(location)
        except GeocodingError as e:
            raise GeocodingFailed(location, str(e)) from e

        try:
            latitude, longitude = float(result.lat), float(result.lon)
            if not (math.isfinite(latitude) and math.isfinite(longitude)):
                raise ValueError("non-finite coordinates")
            coords = Coordinates(latitude=latitude, longitude=longitude)
        except (ValueError, ValidationError) as e:
            logger.error(f"Unusable geocoder coordinates for {location}: {result}")
            raise InvalidGeocodeResult(location, result.lat, result.lon) from e

        logger.info(f"Found coordinates for {location}: {coords}")
        return coords
