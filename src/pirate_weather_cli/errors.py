class PirateWeatherError(Exception):
    """Base class for failures reported to the user"""


class ConfigurationError(PirateWeatherError):
    """Startup configuration is missing or invalid"""


class GeocodingError(PirateWeatherError):
    """A geocoding lookup failed"""


class ResolutionError(PirateWeatherError):
    """A location could not be turned into coordinates"""

    hint = "Please try entering the coordinates directly (latitude,longitude)"

    def __str__(self) -> str:
        return f"{super().__str__()}\n{self.hint}"


class GeocodingFailed(ResolutionError):
    def __init__(self, location: str, cause: str):
        self.location = location
        self.cause = cause
        super().__init__(f"Error geocoding location '{location}': {cause}")


class InvalidGeocodeResult(ResolutionError):
    def __init__(self, location: str, lat: str, lon: str):
        self.location = location
        self.lat = lat
        self.lon = lon
        super().__init__(f"Geocoder returned invalid coordinates for '{location}': lat={lat!r}, lon={lon!r}")


class RequestValidationError(PirateWeatherError):
    """A weather request could not be built from the supplied values"""


class BadTimestamp(RequestValidationError):
    def __init__(self, value: str | None):
        self.value = value
        super().__init__(f"Invalid time format: {value!r} (expected YYYY-MM-DD)")


class TransportError(PirateWeatherError):
    """The weather API call failed or returned an unusable payload"""
