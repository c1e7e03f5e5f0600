"""Location service data models."""

from location_service.models.location import LocationResponse, SavedLocation
from location_service.models.weather import Currently, Weather

__all__ = [
    "Currently",
    "LocationResponse",
    "SavedLocation",
    "Weather",
]
