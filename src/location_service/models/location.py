"""Saved location and read-endpoint response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat
from pydantic.alias_generators import to_camel

from location_service.models.weather import Currently, Weather

DEFAULT_NAME = "London"
DEFAULT_LAT_LNG = (51.510803, -0.120703)


class SavedLocation(BaseModel):
    """Operator-chosen location, persisted as ``{"name": ..., "latLng": [lat, lng]}``.

    Only the wire names are accepted, and coordinates must be JSON numbers.
    Build instances with ``SavedLocation(name=..., latLng=(lat, lng))``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    lat_lng: tuple[StrictFloat, StrictFloat] = Field(alias="latLng")

    @classmethod
    def default(cls) -> SavedLocation:
        return cls(name=DEFAULT_NAME, latLng=DEFAULT_LAT_LNG)

    @property
    def latitude(self) -> float:
        return self.lat_lng[0]

    @property
    def longitude(self) -> float:
        return self.lat_lng[1]

    def in_range(self) -> bool:
        """True if latitude is within [-90, 90] and longitude within [-180, 180]."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class LocationResponse(BaseModel):
    """Body of ``GET /location``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    location: str
    latitude: float
    longitude: float
    timezone: str
    offset: float
    elevation: int
    currently: Currently

    @classmethod
    def compose(cls, name: str, lat_lng: tuple[float, float], weather: Weather) -> LocationResponse:
        """Coordinates come from the active location, everything else from the forecast."""
        return cls(
            location=name,
            latitude=lat_lng[0],
            longitude=lat_lng[1],
            timezone=weather.timezone,
            offset=weather.offset,
            elevation=weather.elevation,
            currently=weather.currently,
        )
