"""Process entrypoint: ``python -m location_service`` or ``location-service``."""

from __future__ import annotations

import logging
import sys

import uvicorn

from location_service.app import create_app
from location_service.client import PirateWeatherClient
from location_service.config import Settings, load_settings
from location_service.exceptions import ConfigError, LocationFileError
from location_service.logs import configure_logging
from location_service.models.location import SavedLocation
from location_service.service import LocationService
from location_service.store import LocationStore

logger = logging.getLogger("location_service")


def build(settings: Settings, store: LocationStore | None = None):
    """Load the saved location and wire the app. Returns the FastAPI app."""
    store = store or LocationStore()
    try:
        saved = store.load()
    except LocationFileError:
        saved = SavedLocation.default()

    upstream = PirateWeatherClient(timeout=settings.upstream_timeout)
    service = LocationService(
        settings.pirate_weather_token,
        settings.auth_token,
        saved,
        upstream=upstream,
        store=store,
    )
    return create_app(
        service,
        cors_origins=settings.cors_list,
        cors_origin_regex=settings.cors_origin_regex,
        on_shutdown=upstream.close,
    )


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        configure_logging()
        logger.critical("%s", exc)
        return 1

    configure_logging(settings.env, settings.log_level)
    app = build(settings)

    host = "0.0.0.0"
    logger.info("Running server on %s:%d", host, settings.port)
    uvicorn.run(app, host=host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
