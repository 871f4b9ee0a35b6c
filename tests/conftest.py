"""Shared fixtures: sample cities, forecast payloads and fake network functions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any
from unittest.mock import Mock

import pytest

from weather_dashboard.errors import HttpError
from weather_dashboard.models import City, DayForecast

PARIS = City(id=2988507, name="Париж", country="Франция", lat=48.85341, lon=2.3488)
BERLIN = City(id=2950159, name="Берлин", country="Германия", lat=52.52437, lon=13.41053)
MOSCOW = City(id=524901, name="Москва", country="Россия", lat=55.75222, lon=37.61556)


def daily_payload(days: int = 3) -> dict[str, Any]:
    """A forecast response body with ``days`` days starting 2026-10-19 (a Monday)."""
    dates = [date(2026, 10, 19 + i).isoformat() for i in range(days)]
    return {
        "latitude": 48.86,
        "longitude": 2.35,
        "daily": {
            "time": dates,
            "temperature_2m_max": [5.4 + i for i in range(days)],
            "temperature_2m_min": [-2.5 + i for i in range(days)],
            "weathercode": [3, 61, 95, 0, 0, 0, 0][:days],
        },
    }


def mock_response(status: int = 200, json_data: Any = None, json_error: bool = False) -> Mock:
    """A stand-in for ``requests.Response``."""
    resp = Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    if json_error:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = json_data
    return resp


def sample_days(count: int = 3) -> list[DayForecast]:
    return [
        DayForecast(
            date=date(2026, 10, 19 + i),
            temp_min=-2.5 + i,
            temp_max=5.4 + i,
            weather_code=[3, 61, 95, 0, 0][i],
        )
        for i in range(count)
    ]


class FakeFetch:
    """Async forecast fetcher recording calls; fails for coordinates in ``failing``."""

    def __init__(self, failing: Sequence[tuple[float, float]] = ()) -> None:
        self.calls: list[tuple[float, float]] = []
        self.failing = set(failing)

    async def __call__(self, lat: float, lon: float) -> list[DayForecast]:
        self.calls.append((lat, lon))
        if (lat, lon) in self.failing:
            msg = "Ошибка HTTP: 500"
            raise HttpError(msg, 500)
        return sample_days()


class FakeSearch:
    """Async city search over a fixed list, matching on name prefix."""

    def __init__(self, cities: Sequence[City] = (PARIS, BERLIN, MOSCOW)) -> None:
        self.cities = list(cities)
        self.queries: list[str] = []

    async def __call__(self, query: str) -> list[City]:
        self.queries.append(query)
        prefix = query.strip().lower()
        return [c for c in self.cities if c.name.lower().startswith(prefix)]


@pytest.fixture
def fake_fetch() -> FakeFetch:
    return FakeFetch()


@pytest.fixture
def fake_search() -> FakeSearch:
    return FakeSearch()
