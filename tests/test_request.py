from datetime import date

import pytest
from pydantic import ValidationError

from pirate_weather_cli.errors import BadTimestamp
from pirate_weather_cli.models import Coordinates, RequestMode, UnitSystem, WeatherRequest
from pirate_weather_cli.request import build_request, normalize_units, parse_date

COORDS = Coordinates(latitude=48.8566, longitude=2.3522)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("si", UnitSystem.SI),
        ("US", UnitSystem.US),
        (" uk ", UnitSystem.UK),
        ("ca", UnitSystem.CA),
        ("bogus", UnitSystem.SI),
        ("", UnitSystem.SI),
        (None, UnitSystem.SI),
    ],
)
def test_normalize_units(raw, expected):
    assert normalize_units(raw) is expected


def test_build_current_request():
    request = build_request(COORDS, RequestMode.CURRENT, "us")

    assert request == WeatherRequest(coordinates=COORDS, mode=RequestMode.CURRENT, units=UnitSystem.US)
    assert request.at is None


def test_build_request_unknown_units_defaults_to_si():
    request = build_request(COORDS, RequestMode.CURRENT, "bogus")
    assert request.units is UnitSystem.SI


def test_build_current_request_ignores_timestamp():
    request = build_request(COORDS, RequestMode.CURRENT, "si", "not a date")
    assert request.at is None


def test_build_historical_request():
    request = build_request(COORDS, RequestMode.HISTORICAL, "ca", "2023-06-01")

    assert request.mode is RequestMode.HISTORICAL
    assert request.at == date(2023, 6, 1)
    assert request.units is UnitSystem.CA


@pytest.mark.parametrize("value", ["2024-13-40", "2023-02-29", "2023-6-1", "01-06-2023", "20230601", "", None])
def test_build_historical_request_bad_timestamp(value):
    with pytest.raises(BadTimestamp):
        build_request(COORDS, RequestMode.HISTORICAL, "si", value)


def test_parse_date_strips_whitespace():
    assert parse_date(" 2024-02-29 ") == date(2024, 2, 29)


def test_request_descriptor_requires_date_for_historical():
    with pytest.raises(ValidationError):
        WeatherRequest(coordinates=COORDS, mode=RequestMode.HISTORICAL)


def test_request_descriptor_is_immutable():
    request = build_request(COORDS, RequestMode.CURRENT, "si")
    with pytest.raises(ValidationError):
        request.units = UnitSystem.US
