"""Handler-scoped service context: current location, auth, and location swaps."""

from __future__ import annotations

import asyncio
import hmac
import logging

from location_service._locks import RWLock
from location_service.cache import ActiveLocation, Clock, WeatherSource, current_unix_millis
from location_service.exceptions import AuthError, InvalidLocationError
from location_service.models.location import LocationResponse, SavedLocation
from location_service.store import LocationStore

logger = logging.getLogger(__name__)


class LocationService:
    """Everything a request handler needs, passed explicitly rather than kept global.

    The active location sits behind a reader/writer lock. Readers keep the
    read side for the whole upstream fetch, so a location swap waits for
    in-flight fetches to finish.
    """

    def __init__(
        self,
        pirate_weather_token: str,
        admin_auth_token: str,
        saved_location: SavedLocation,
        *,
        upstream: WeatherSource,
        store: LocationStore | None = None,
        clock: Clock = current_unix_millis,
    ) -> None:
        self._pirate_weather_token = pirate_weather_token
        self._admin_auth_token = admin_auth_token
        self._upstream = upstream
        self._store = store or LocationStore()
        self._clock = clock
        self._active = ActiveLocation.from_saved(saved_location, upstream, clock)
        self._active_lock = RWLock()

    @property
    def active(self) -> ActiveLocation:
        return self._active

    async def current(self) -> LocationResponse:
        """Current location with its weather.

        Raises:
            WeatherUnavailableError: weather could not be served.
        """
        async with self._active_lock.read():
            active = self._active
            weather = await active.get_weather(self._pirate_weather_token)
            return LocationResponse.compose(active.name, active.lat_lng, weather)

    def authorize(self, authorization: str | None) -> None:
        """Require the header to equal the admin token exactly.

        Raises:
            AuthError: the header is missing or different.
        """
        if authorization is None:
            raise AuthError("missing")
        if not hmac.compare_digest(
            authorization.encode("utf-8"), self._admin_auth_token.encode("utf-8")
        ):
            raise AuthError("invalid")

    async def change_location(self, authorization: str | None, location: SavedLocation) -> None:
        """Persist ``location`` and make it active with an empty weather cell.

        Raises:
            AuthError: bad or missing Authorization; nothing is saved.
            InvalidLocationError: coordinates out of range; nothing is saved.
            LocationFileError: the save failed; the active location is unchanged.
        """
        try:
            self.authorize(authorization)
        except AuthError as exc:
            logger.warning("Unable to set location without valid auth token: %s", exc)
            raise

        if not location.in_range():
            raise InvalidLocationError(
                f"latLng {list(location.lat_lng)} outside [-90, 90] x [-180, 180]"
            )

        await asyncio.to_thread(self._store.save, location)

        logger.info("Setting the location to %r", location)
        async with self._active_lock.write():
            self._active = ActiveLocation.from_saved(location, self._upstream, self._clock)
