"""location-service — current weather for one operator-chosen location."""

from location_service.cache import CACHE_TTL_MS, ActiveLocation, WeatherCell
from location_service.client import PirateWeatherClient
from location_service.exceptions import (
    AuthError,
    ConfigError,
    InvalidLocationError,
    LocationFileError,
    LocationServiceError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamResponseError,
    UpstreamTimeoutError,
    WeatherUnavailableError,
)
from location_service.service import LocationService
from location_service.store import LocationStore

__all__ = [
    "CACHE_TTL_MS",
    "ActiveLocation",
    "AuthError",
    "ConfigError",
    "InvalidLocationError",
    "LocationFileError",
    "LocationService",
    "LocationServiceError",
    "LocationStore",
    "PirateWeatherClient",
    "UpstreamConnectionError",
    "UpstreamError",
    "UpstreamResponseError",
    "UpstreamTimeoutError",
    "WeatherCell",
    "WeatherUnavailableError",
]

__version__ = "0.1.0"
