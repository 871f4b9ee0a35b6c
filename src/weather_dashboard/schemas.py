"""
Wire and persistence schemas.

Pydantic models for data coming from external APIs and from the storage
slot. Clients validate raw JSON against these and convert the result to
the domain dataclasses in ``models.py``.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator

from weather_dashboard.models import City, DayForecast

# =============================================================================
# Persistence
# =============================================================================


class CityRecord(BaseModel):
    """A city as stored in the ``extraCities`` / ``mainCity`` slots."""

    id: int
    name: str = Field(min_length=1)
    country: str = ""
    lat: float
    lon: float

    @field_validator("country", mode="before")
    @classmethod
    def _none_country(cls, value: object) -> object:
        return "" if value is None else value

    @classmethod
    def from_city(cls, city: City) -> CityRecord:
        return cls(id=city.id, name=city.name, country=city.country, lat=city.lat, lon=city.lon)

    def to_city(self) -> City:
        return City(id=self.id, name=self.name, country=self.country, lat=self.lat, lon=self.lon)


class StoredState(BaseModel):
    """Serialized ``AppState`` (camelCase keys, compatible with earlier versions)."""

    model_config = {"populate_by_name": True}

    use_geolocation: bool = Field(alias="useGeolocation")
    main_city: CityRecord | None = Field(default=None, alias="mainCity")
    extra_cities: list[CityRecord] = Field(default_factory=list, alias="extraCities")


# =============================================================================
# Geocoding API
# =============================================================================


class GeocodingResult(BaseModel):
    """One entry of the geocoding ``results`` array."""

    id: int
    name: str
    country: str | None = None
    latitude: float
    longitude: float

    def to_city(self) -> City:
        return City(
            id=self.id,
            name=self.name,
            country=self.country or "",
            lat=self.latitude,
            lon=self.longitude,
        )


# =============================================================================
# Forecast API
# =============================================================================


class DailyForecastPayload(BaseModel):
    """The ``daily`` block of a forecast response (parallel arrays)."""

    time: list[date]
    temperature_2m_min: list[float]
    temperature_2m_max: list[float]
    weathercode: list[int]

    def days(self, limit: int) -> list[DayForecast]:
        """Zip the parallel arrays into at most ``limit`` days."""
        count = min(limit, len(self.time))
        return [
            DayForecast(
                date=self.time[i],
                temp_min=self.temperature_2m_min[i],
                temp_max=self.temperature_2m_max[i],
                weather_code=self.weathercode[i],
            )
            for i in range(count)
        ]

    def shortest_series(self) -> int:
        return min(
            len(self.temperature_2m_min),
            len(self.temperature_2m_max),
            len(self.weathercode),
        )
