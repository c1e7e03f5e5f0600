"""Active location and its TTL-gated weather cell."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, Protocol

from location_service._locks import RWLock
from location_service.exceptions import UpstreamError, WeatherUnavailableError
from location_service.models.location import SavedLocation
from location_service.models.weather import Weather

CACHE_TTL_MS = int(timedelta(hours=1).total_seconds() * 1000)

Clock = Callable[[], int]

logger = logging.getLogger(__name__)


def current_unix_millis() -> int:
    return time.time_ns() // 1_000_000


class WeatherSource(Protocol):
    async def forecast(self, api_token: str, latitude: float, longitude: float) -> Weather: ...


class CellState(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"
    BROKEN = "broken"


@dataclass(frozen=True)
class WeatherCell:
    """Last observation and when it was taken. ``observed_at_ms == 0`` means never."""

    observed_at_ms: int = 0
    observation: Weather | None = None

    def is_fresh(self, now_ms: int) -> bool:
        return self.observed_at_ms > now_ms - CACHE_TTL_MS

    def state(self, now_ms: int) -> CellState:
        if self.is_fresh(now_ms):
            return CellState.FRESH if self.observation is not None else CellState.BROKEN
        if self.observed_at_ms == 0:
            return CellState.EMPTY
        return CellState.STALE


class ActiveLocation:
    """The location currently served, with its own weather cell.

    The cell is one immutable record replaced as a whole, so the freshness
    check and the observation read always see the same pair.
    """

    def __init__(
        self,
        name: str,
        lat_lng: tuple[float, float],
        upstream: WeatherSource,
        clock: Clock = current_unix_millis,
    ) -> None:
        self.name = name
        self.lat_lng = lat_lng
        self._upstream = upstream
        self._clock = clock
        self._cell = WeatherCell()
        self._cell_lock = RWLock()

    @classmethod
    def from_saved(
        cls,
        location: SavedLocation,
        upstream: WeatherSource,
        clock: Clock = current_unix_millis,
    ) -> ActiveLocation:
        return cls(location.name, location.lat_lng, upstream, clock)

    def __repr__(self) -> str:
        return f"ActiveLocation(name={self.name!r}, lat_lng={self.lat_lng!r})"

    @property
    def cell(self) -> WeatherCell:
        return self._cell

    async def get_weather(self, api_token: str) -> Weather:
        """Return an observation no older than the TTL, fetching one if needed.

        Raises:
            WeatherUnavailableError: the fetch failed, or the cell claimed to be
                fresh without holding an observation. The latter resets the cell
                so the next call refetches.
        """
        now = self._clock()
        async with self._cell_lock.read():
            cell = self._cell

        state = cell.state(now)
        logger.debug("Weather cell for %s is %s", self.name, state.value)
        if state is CellState.BROKEN:
            logger.error(
                "Cached weather is missing but TTL is set for %s (observed_at_ms=%d)",
                self.name, cell.observed_at_ms,
            )
            async with self._cell_lock.write():
                # a fetch may have stored a good record since the snapshot
                if self._cell is cell:
                    self._cell = WeatherCell()
            raise WeatherUnavailableError()
        if state is CellState.FRESH:
            logger.info("Returning cached weather for %s", self.name)
            return cell.observation  # type: ignore[return-value]

        latitude, longitude = self.lat_lng
        try:
            weather = await self._upstream.forecast(api_token, latitude, longitude)
        except UpstreamError as exc:
            logger.error("Failed to fetch weather for %s: %s", self.name, exc)
            raise WeatherUnavailableError() from exc

        async with self._cell_lock.write():
            self._cell = WeatherCell(observed_at_ms=self._clock(), observation=weather)
        logger.info("Returning uncached weather for %s", self.name)
        return weather
