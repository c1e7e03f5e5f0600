"""Shared test fixtures and sample API responses."""

from __future__ import annotations

import logging

import pytest

from location_service.exceptions import UpstreamError
from location_service.models.weather import Weather

TOKEN = "pw-token"
ADMIN_TOKEN = "admin-secret"

LONDON_JSON = '{"name":"London","latLng":[51.510803,-0.120703]}'
PARIS = {"name": "Paris", "latLng": [48.8566, 2.3522]}

# Trimmed Pirate Weather response; "minutely"/"flags" are not modelled.
SAMPLE_FORECAST = {
    "latitude": 51.5108,
    "longitude": -0.1207,
    "timezone": "Europe/London",
    "offset": 1.0,
    "elevation": 11,
    "currently": {
        "time": 1729339200,
        "summary": "Partly Cloudy",
        "icon": "partly-cloudy-day",
        "nearestStormDistance": 12.5,
        "nearestStormBearing": 270,
        "precipIntensity": 0.0,
        "precipProbability": 0.05,
        "precipIntensityError": 0.01,
        "precipType": "none",
        "temperature": 14.2,
        "apparentTemperature": 13.1,
        "dewPoint": 9.4,
        "humidity": 0.73,
        "pressure": 1012.3,
        "windSpeed": 11.2,
        "windGust": 19.8,
        "windBearing": 240,
        "cloudCover": 0.48,
        "uvIndex": 1.6,
        "visibility": 16.09,
        "ozone": 287.4,
    },
    "minutely": {"summary": "Clear for the hour.", "data": []},
    "flags": {"units": "uk2", "version": "V2.4"},
}


class FakeClock:
    """Manually advanced Unix-ms clock."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeUpstream:
    """Stands in for PirateWeatherClient and records every forecast call."""

    def __init__(self, weather: Weather | None = None, error: UpstreamError | None = None) -> None:
        self.weather = weather or Weather.model_validate(SAMPLE_FORECAST)
        self.error = error
        self.calls: list[tuple[str, float, float]] = []

    async def forecast(self, api_token: str, latitude: float, longitude: float) -> Weather:
        self.calls.append((api_token, latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.weather


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def sample_weather() -> Weather:
    return Weather.model_validate(SAMPLE_FORECAST)


@pytest.fixture
def setting_path(tmp_path, monkeypatch):
    """Point SETTING_PATH at a fresh file under tmp_path."""
    path = tmp_path / "location.json"
    monkeypatch.setenv("SETTING_PATH", str(path))
    return path


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo configure_logging so caplog sees records in every test."""
    yield
    logger = logging.getLogger("location_service")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
