from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Coordinates(BaseModel):
    """Geographic coordinates"""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class UnitSystem(str, Enum):
    """Pirate Weather unit systems"""

    SI = "si"
    US = "us"
    UK = "uk"
    CA = "ca"

    @property
    def temperature_unit(self) -> str:
        return "°F" if self is UnitSystem.US else "°C"

    @property
    def speed_unit(self) -> str:
        return {
            UnitSystem.SI: "m/s",
            UnitSystem.US: "mph",
            UnitSystem.UK: "mph",
            UnitSystem.CA: "km/h",
        }[self]

    @property
    def distance_unit(self) -> str:
        return "mi" if self in (UnitSystem.US, UnitSystem.UK) else "km"


class RequestMode(str, Enum):
    CURRENT = "current"
    HISTORICAL = "historical"


class WeatherRequest(BaseModel):
    """Fully populated description of one weather API call"""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    mode: RequestMode
    units: UnitSystem = UnitSystem.SI
    at: Optional[date] = None

    @model_validator(mode="after")
    def _check_mode(self) -> "WeatherRequest":
        if self.mode is RequestMode.HISTORICAL and self.at is None:
            raise ValueError("historical requests need a date")
        if self.mode is RequestMode.CURRENT and self.at is not None:
            raise ValueError("current forecast requests take no date")
        return self


class WeatherQuery(BaseModel):
    """Raw values collected by an entry point before validation"""

    model_config = ConfigDict(frozen=True)

    location: str
    units: str = "si"
    mode: RequestMode = RequestMode.CURRENT
    time: Optional[str] = None
    fallback_to_today: bool = False


class _PirateWeatherModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CurrentConditions(_PirateWeatherModel):
    """Conditions at the requested moment, in the request's unit system"""

    time: int
    temperature: float
    apparent_temperature: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_bearing: Optional[float] = None
    cloud_cover: Optional[float] = None
    uv_index: Optional[float] = None
    visibility: Optional[float] = None
    fire_index: Optional[float] = None
    smoke: Optional[float] = None


class HourPoint(_PirateWeatherModel):
    time: int
    summary: Optional[str] = None
    temperature: Optional[float] = None
    precip_probability: Optional[float] = None


class DayPoint(_PirateWeatherModel):
    time: int
    summary: Optional[str] = None
    temperature_high: Optional[float] = None
    temperature_low: Optional[float] = None


class HourlyBlock(_PirateWeatherModel):
    summary: Optional[str] = None
    data: List[HourPoint] = []


class DailyBlock(_PirateWeatherModel):
    summary: Optional[str] = None
    data: List[DayPoint] = []


class Alert(_PirateWeatherModel):
    title: str
    description: str = ""
    severity: Optional[str] = None
    uri: Optional[str] = None


class ForecastResult(_PirateWeatherModel):
    """Forecast or time machine response"""

    latitude: float
    longitude: float
    timezone: str
    currently: CurrentConditions
    hourly: Optional[HourlyBlock] = None
    daily: Optional[DailyBlock] = None
    alerts: List[Alert] = []
    units: UnitSystem = UnitSystem.SI


class GeocodeResult(BaseModel):
    """Forward geocoding hit, coordinates as returned by the geocoder"""

    model_config = ConfigDict(frozen=True)

    lat: str
    lon: str
    display_name: str = ""


class AddressInfo(BaseModel):
    """Reverse geocoded address"""

    model_config = ConfigDict(frozen=True)

    display_name: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
