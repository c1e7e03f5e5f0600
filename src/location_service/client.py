"""Async client for the Pirate Weather forecast API."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from location_service._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, AsyncTransport
from location_service.exceptions import UpstreamResponseError
from location_service.logs import log_upstream_call
from location_service.models.weather import Weather

UNITS = "uk"


class PirateWeatherClient:
    """Asynchronous client for the Pirate Weather API.

    Usage:
        async with PirateWeatherClient() as pw:
            weather = await pw.forecast(token, 51.510803, -0.120703)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> PirateWeatherClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    @log_upstream_call
    async def forecast(self, api_token: str, latitude: float, longitude: float) -> Weather:
        """Get the forecast for a point, in UK units."""
        body = await self._transport.get_text(
            f"/forecast/{api_token}/{latitude},{longitude}",
            [("units", UNITS)],
        )
        try:
            return Weather.model_validate_json(body)
        except ValidationError as exc:
            raise UpstreamResponseError(f"failed to parse forecast body: {exc}") from exc
