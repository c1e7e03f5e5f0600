"""Custom exceptions for the location service."""

from __future__ import annotations

INTERNAL = "internal"


class LocationServiceError(Exception):
    """Base exception for all location service errors."""


class ConfigError(LocationServiceError):
    """Raised when a required setting is missing at startup."""


class LocationFileError(LocationServiceError):
    """Raised when the saved-location file cannot be read or written."""


class UpstreamError(LocationServiceError):
    """Base exception for failures talking to the weather API."""


class UpstreamConnectionError(UpstreamError):
    """Raised when the client cannot connect to the weather API."""


class UpstreamTimeoutError(UpstreamError):
    """Raised when a request to the weather API times out."""


class UpstreamResponseError(UpstreamError):
    """Raised when the weather API body cannot be read or parsed."""


class WeatherUnavailableError(LocationServiceError):
    """Opaque weather failure. The message is always ``"internal"``."""

    def __init__(self) -> None:
        super().__init__(INTERNAL)


class AuthError(LocationServiceError):
    """Raised when the Authorization header does not match the admin token."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Authorization header is {reason}")


class InvalidLocationError(LocationServiceError):
    """Raised when a submitted location has out-of-range coordinates."""
