"""Domain models.

Plain dataclasses passed between the store, the datasources, the
controllers and the UI surfaces. Wire/persistence shapes live in
``schemas.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, eq=False)
class City:
    """A geocoded city. Two cities are equal when their ids are."""

    id: int
    name: str
    country: str
    lat: float
    lon: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, City):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def display_name(self) -> str:
        """``Paris (France)``, or just ``Paris`` when the country is unknown."""
        return f"{self.name} ({self.country})" if self.country else self.name


@dataclass(frozen=True)
class AppState:
    """Everything the dashboard persists between sessions.

    While ``use_geolocation`` is true, ``main_city`` is kept but ignored
    when deciding what to render.
    """

    use_geolocation: bool = True
    main_city: City | None = None
    extra_cities: tuple[City, ...] = field(default_factory=tuple)

    @property
    def extra_city_ids(self) -> list[int]:
        return [c.id for c in self.extra_cities]


@dataclass(frozen=True)
class DayForecast:
    """One day of the daily forecast."""

    date: date
    temp_min: float
    temp_max: float
    weather_code: int


@dataclass(frozen=True)
class ForecastEntry:
    """A day card ready for display."""

    date: date
    label: str
    temperature: str
    description: str
    is_today: bool = False


@dataclass(frozen=True)
class PendingSelection:
    """City picked from the suggestion list, not yet submitted."""

    city_id: int
    lat: float
    lon: float
    country: str = ""


class StatusKind(StrEnum):
    """Visual state of a status line."""

    INFO = "info"
    LOADING = "loading"
    ERROR = "error"

    @property
    def css_class(self) -> str:
        if self is StatusKind.INFO:
            return "status"
        return f"status status--{self.value}"
