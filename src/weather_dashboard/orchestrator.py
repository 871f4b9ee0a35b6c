"""Per-location fetch-and-render lifecycle.

``render_forecast`` drives one status/forecast pair through
loading → success | error. Calls for different locations (or repeated
calls for the same one) are independent: nothing orders or cancels them,
so whichever request finishes last owns its surfaces.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from weather_dashboard import messages
from weather_dashboard.datasources.weather import FORECAST_DAYS, afetch_forecast, describe_weather_code
from weather_dashboard.errors import WeatherDashboardError
from weather_dashboard.log import get_logger
from weather_dashboard.models import DayForecast, ForecastEntry, StatusKind
from weather_dashboard.renderers.date_utils import short_day_label, temperature_range

if TYPE_CHECKING:
    from weather_dashboard.ui import ForecastSurface, StatusSurface

ForecastFetcher = Callable[[float, float], Awaitable[Sequence[DayForecast]]]

_log = get_logger("orchestrator")


@dataclass(frozen=True)
class RenderTarget:
    """A coordinate and the surfaces its forecast is shown on."""

    lat: float
    lon: float
    status: StatusSurface
    forecast: ForecastSurface


def build_forecast_entries(days: Sequence[DayForecast]) -> list[ForecastEntry]:
    """Day cards for the first (at most 3) days; the first one is today."""
    entries = []
    for i, day in enumerate(days[:FORECAST_DAYS]):
        is_today = i == 0
        entries.append(
            ForecastEntry(
                date=day.date,
                label=messages.TODAY if is_today else short_day_label(day.date),
                temperature=temperature_range(day.temp_min, day.temp_max),
                description=describe_weather_code(day.weather_code),
                is_today=is_today,
            )
        )
    return entries


async def render_forecast(target: RenderTarget, fetch: ForecastFetcher = afetch_forecast) -> bool:
    """
    Fetch and render the forecast for ``target``.

    Returns:
        True when the forecast was rendered, False when an error status was
        shown instead. Errors never propagate.
    """
    target.status.set_status(messages.LOADING_FORECAST, StatusKind.LOADING)
    target.forecast.set_forecast_entries([])

    try:
        days = await fetch(target.lat, target.lon)
    except WeatherDashboardError as e:
        _log.error("Forecast for (%s, %s) failed: %s", target.lat, target.lon, e)
        target.status.set_status(messages.FORECAST_FAILED.format(error=e), StatusKind.ERROR)
        return False
    except Exception:
        _log.exception("Forecast for (%s, %s) failed unexpectedly", target.lat, target.lon)
        target.status.set_status(
            messages.FORECAST_FAILED.format(error=messages.UNEXPECTED_ERROR), StatusKind.ERROR
        )
        return False

    target.forecast.set_forecast_entries(build_forecast_entries(days))
    target.status.set_status(messages.FORECAST_LOADED, StatusKind.INFO)
    return True
