"""Open-Meteo weather data source.

Public API:
  - forecast: build_forecast_url, fetch_forecast, afetch_forecast (3-day daily forecast)
  - codes: describe_weather_code, classify_weather_code (WMO code table)
  - client: API URL, shared constants
"""

from weather_dashboard.datasources.weather.client import FORECAST_DAYS, OPEN_METEO_API
from weather_dashboard.datasources.weather.codes import (
    CATEGORY_LABELS,
    WeatherCategory,
    classify_weather_code,
    describe_weather_code,
)
from weather_dashboard.datasources.weather.forecast import (
    afetch_forecast,
    build_forecast_url,
    fetch_forecast,
    parse_daily,
)

__all__ = [
    "CATEGORY_LABELS",
    "FORECAST_DAYS",
    "OPEN_METEO_API",
    "WeatherCategory",
    "afetch_forecast",
    "build_forecast_url",
    "classify_weather_code",
    "describe_weather_code",
    "fetch_forecast",
    "parse_daily",
]
