"""Device geolocation capability.

The dashboard asks a ``Geolocator`` for a one-shot position. Hosts that
know where the device is provide one; without one the capability is
absent and the dashboard falls back to manual city selection.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from weather_dashboard.errors import GeolocationError, GeolocationReason

if TYPE_CHECKING:
    from weather_dashboard.config import Settings


@dataclass(frozen=True)
class GeolocationOptions:
    """Options of a position request (timeout in seconds)."""

    enable_high_accuracy: bool = True
    timeout: float = 10.0


@dataclass(frozen=True)
class Position:
    lat: float
    lon: float


class Geolocator(Protocol):
    """One-shot position source. Raises ``GeolocationError`` on failure."""

    async def current_position(self, options: GeolocationOptions) -> Position: ...


class FixedGeolocator:
    """Reports a configured position (e.g. from ``WEATHER_DASHBOARD_LAT/LON``)."""

    def __init__(self, lat: float, lon: float) -> None:
        self.position = Position(lat, lon)

    async def current_position(self, options: GeolocationOptions) -> Position:
        return self.position


class DeniedGeolocator:
    """A capability that always refuses, like a user declining the prompt."""

    async def current_position(self, options: GeolocationOptions) -> Position:
        raise GeolocationError(GeolocationReason.PERMISSION_DENIED, "User denied Geolocation")


async def locate(geolocator: Geolocator, options: GeolocationOptions) -> Position:
    """Request a position, turning an expired ``options.timeout`` into ``GeolocationError``."""
    try:
        return await asyncio.wait_for(geolocator.current_position(options), options.timeout)
    except TimeoutError as e:
        raise GeolocationError(GeolocationReason.TIMEOUT, "Timeout expired") from e


def geolocator_from_settings(settings: Settings) -> Geolocator | None:
    """A ``FixedGeolocator`` when both coordinates are configured, else None."""
    if settings.lat is None or settings.lon is None:
        return None
    return FixedGeolocator(settings.lat, settings.lon)


def options_from_settings(settings: Settings) -> GeolocationOptions:
    return GeolocationOptions(
        enable_high_accuracy=True,
        timeout=settings.geolocation_timeout_ms / 1000,
    )
