"""Exception taxonomy.

Every error the dashboard raises derives from ``WeatherDashboardError`` so
operation boundaries can catch one type, log it and turn ``str(exc)`` into a
user-visible status message.
"""

from __future__ import annotations

from enum import StrEnum


class WeatherDashboardError(Exception):
    """Base class for dashboard errors."""


class HttpError(WeatherDashboardError):
    """An API answered with a non-success status."""

    def __init__(self, message: str, status: int, url: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class NetworkError(WeatherDashboardError):
    """The request never produced a response (DNS, connection, timeout)."""


class MalformedResponseError(WeatherDashboardError):
    """A response was missing fields the client relies on."""


class GeolocationReason(StrEnum):
    """Why the device position could not be determined."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


class GeolocationError(WeatherDashboardError):
    """Position request denied, unsupported or timed out."""

    def __init__(self, reason: GeolocationReason, message: str = "") -> None:
        super().__init__(message or reason.value)
        self.reason = reason


class PersistenceError(WeatherDashboardError):
    """The key-value storage could not be read or written."""


class ValidationError(WeatherDashboardError):
    """User-facing form problem (empty name, no selection, duplicate city)."""
