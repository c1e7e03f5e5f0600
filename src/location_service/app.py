"""FastAPI application exposing ``/location``.

- ``GET /location``: current location and its (cached) weather, no auth.
- ``POST /location``: operator-only location change. The ``Authorization``
  header must equal the admin token verbatim; there is no ``Bearer`` scheme.

The service context lives on ``app.state.service`` and reaches handlers via a
dependency, so nothing here is module-global.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from location_service.exceptions import (
    INTERNAL,
    AuthError,
    InvalidLocationError,
    LocationFileError,
    WeatherUnavailableError,
)
from location_service.models.location import LocationResponse, SavedLocation
from location_service.service import LocationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["location"])


def get_service(request: Request) -> LocationService:
    return request.app.state.service


ServiceDep = Annotated[LocationService, Depends(get_service)]


@router.get("/location", response_model=LocationResponse)
async def get_location(service: ServiceDep):
    """Current location merged with its weather. 500 ``internal`` when weather is unavailable."""
    logger.info("fetching weather")
    try:
        return await service.current()
    except WeatherUnavailableError:
        return PlainTextResponse(INTERNAL, status_code=500)


@router.post("/location")
async def set_location(
    body: SavedLocation,
    service: ServiceDep,
    authorization: Annotated[Optional[str], Header()] = None,
):
    """Change the active location. 401 on bad auth, 400 on bad coordinates, 500 if the save fails."""
    try:
        await service.change_location(authorization, body)
    except AuthError:
        return Response(status_code=401)
    except InvalidLocationError as exc:
        return PlainTextResponse(str(exc), status_code=400)
    except LocationFileError as exc:
        logger.error("Failed to save location: %s", exc)
        return PlainTextResponse(INTERNAL, status_code=500)
    return Response(status_code=200)


def create_app(
    service: LocationService,
    cors_origins: list[str] | None = None,
    cors_origin_regex: str | None = None,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    """Build the app around an already-constructed service."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        if on_shutdown is not None:
            await on_shutdown()

    app = FastAPI(title="location-service", version="0.1.0", lifespan=lifespan)
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or [],
        allow_origin_regex=cors_origin_regex,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app
