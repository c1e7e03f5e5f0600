"""Pirate Weather forecast models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Currently(BaseModel):
    """Current conditions block of a forecast."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    time: int = 0
    summary: str = ""
    icon: str = ""
    nearest_storm_distance: float = 0.0
    nearest_storm_bearing: float = 0.0
    precip_intensity: float = 0.0
    precip_probability: float = 0.0
    precip_intensity_error: float = 0.0
    precip_type: str = ""
    temperature: float = 0.0
    apparent_temperature: float = 0.0
    dew_point: float = 0.0
    humidity: float = 0.0
    pressure: float = 0.0
    wind_speed: float = 0.0
    wind_gust: float = 0.0
    wind_bearing: float = 0.0
    cloud_cover: float = 0.0
    uv_index: float = 0.0
    visibility: float = 0.0
    ozone: float = 0.0


class Weather(BaseModel):
    """Forecast response, trimmed to the fields the service exposes."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    latitude: float = 0.0
    longitude: float = 0.0
    timezone: str = ""
    offset: float = 0.0
    elevation: int = 0
    currently: Currently = Currently()
