import copy

import httpx
import pytest

API_KEY = "test-key"

FORECAST_PAYLOAD = {
    "latitude": 0.0,
    "longitude": 0.0,
    "timezone": "UTC",
    "offset": 0,
    "elevation": 0,
    "currently": {
        "time": 1700000000,
        "summary": "Clear",
        "icon": "clear-day",
        "temperature": 27.5,
        "apparentTemperature": 29.1,
        "humidity": 0.78,
        "windSpeed": 4.2,
        "windBearing": 135,
        "cloudCover": 0.25,
        "uvIndex": 6,
        "visibility": 16.09,
        "fireIndex": 1.5,
        "smoke": 0.2,
        "pressure": 1011.3,
    },
    "hourly": {
        "summary": "Clear throughout the day.",
        "data": [{"time": 1700000000 + i * 3600, "temperature": 27.0} for i in range(48)],
    },
    "daily": {
        "data": [
            {"time": 1699920000 + i * 86400, "temperatureHigh": 29.0, "temperatureLow": 24.0} for i in range(8)
        ],
    },
    "alerts": [],
    "flags": {"units": "si"},
}

PARIS_SEARCH = [{"lat": "48.8566", "lon": "2.3522", "display_name": "Paris, Île-de-France, France"}]

PARIS_REVERSE = {
    "display_name": "Paris, Île-de-France, France métropolitaine, France",
    "address": {"city": "Paris", "state": "Île-de-France", "country": "France"},
}


class FakeApi:
    """Canned Nominatim and Pirate Weather responses, recording every request"""

    def __init__(self):
        self.requests = []
        self.search_results = copy.deepcopy(PARIS_SEARCH)
        self.reverse_result = copy.deepcopy(PARIS_REVERSE)
        self.forecast = copy.deepcopy(FORECAST_PAYLOAD)
        self.forecast_status = 200
        self.search_error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/search"):
            if self.search_error is not None:
                raise self.search_error("timed out", request=request)
            return httpx.Response(200, json=self.search_results)
        if path.endswith("/reverse"):
            return httpx.Response(200, json=self.reverse_result)
        if path.startswith("/forecast/"):
            if self.forecast_status != 200:
                return httpx.Response(self.forecast_status, text="boom")
            return httpx.Response(200, json=self.forecast)
        return httpx.Response(404)

    def calls(self, kind: str):
        if kind == "search":
            return [r for r in self.requests if r.url.path.endswith("/search")]
        if kind == "reverse":
            return [r for r in self.requests if r.url.path.endswith("/reverse")]
        if kind == "forecast":
            return [r for r in self.requests if r.url.host == "api.pirateweather.net"]
        if kind == "timemachine":
            return [r for r in self.requests if r.url.host == "timemachine.pirateweather.net"]
        raise ValueError(kind)


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def http(fake_api):
    client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))
    yield client
    client.close()


@pytest.fixture
def forecast_payload():
    return copy.deepcopy(FORECAST_PAYLOAD)


@pytest.fixture
def patched_httpx(monkeypatch, fake_api):
    """Route every httpx.Client created by the package through the fake API"""
    real_client = httpx.Client

    def fake_client(**kwargs):
        return real_client(transport=httpx.MockTransport(fake_api.handler), **kwargs)

    monkeypatch.setattr(httpx, "Client", fake_client)
    return fake_api


@pytest.fixture
def api_key_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PIRATE_WEATHER_API_KEY", API_KEY)
