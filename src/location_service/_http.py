"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

import logging

import httpx

from location_service.exceptions import (
    UpstreamConnectionError,
    UpstreamError,
    UpstreamTimeoutError,
)

DEFAULT_BASE_URL = "https://api.pirateweather.net"
DEFAULT_TIMEOUT = 30.0

logger = logging.getLogger(__name__)


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient.

    Status codes are logged but not checked: callers parse whatever body comes
    back, so an upstream error page surfaces as a parse failure.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get_text(self, endpoint: str, params: list[tuple[str, str]]) -> str:
        """Perform an async GET request and return the decoded body."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.ConnectError as exc:
            raise UpstreamConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(str(exc)) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(str(exc)) from exc

        logger.debug("upstream responded with HTTP %d", response.status_code)
        # undecodable bytes and unknown charsets are replaced, never raised
        return response.text

    async def close(self) -> None:
        await self._client.aclose()
