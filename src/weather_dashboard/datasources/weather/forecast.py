"""3-day daily forecast from the Open-Meteo Forecast API."""

from __future__ import annotations

import asyncio
import time
from typing import Any
from urllib.parse import urlencode

import pydantic
import requests

from weather_dashboard import messages
from weather_dashboard.datasources.weather.client import DAILY_VARS, FORECAST_DAYS, OPEN_METEO_API
from weather_dashboard.errors import HttpError, MalformedResponseError, NetworkError
from weather_dashboard.log import get_logger
from weather_dashboard.models import DayForecast
from weather_dashboard.schemas import DailyForecastPayload
from weather_dashboard.services.http import session

_log = get_logger("datasources.weather")


def build_forecast_url(lat: float, lon: float) -> str:
    """Deterministic forecast URL for a coordinate."""
    params = {
        "latitude": str(lat),
        "longitude": str(lon),
        "daily": ",".join(DAILY_VARS),
        "forecast_days": str(FORECAST_DAYS),
        "timezone": "auto",
    }
    return f"{OPEN_METEO_API}?{urlencode(params)}"


def parse_daily(data: Any, limit: int = FORECAST_DAYS) -> list[DayForecast]:
    """
    Extract up to ``limit`` days from a decoded forecast response.

    Raises:
        MalformedResponseError: ``daily`` or ``daily.time`` is absent, or the
            parallel arrays cannot be read as numbers/dates.
    """
    daily = data.get("daily") if isinstance(data, dict) else None
    if not isinstance(daily, dict) or daily.get("time") is None:
        raise MalformedResponseError(messages.MALFORMED_RESPONSE)

    try:
        payload = DailyForecastPayload.model_validate(daily)
    except pydantic.ValidationError as e:
        raise MalformedResponseError(messages.MALFORMED_RESPONSE) from e

    if payload.shortest_series() < min(limit, len(payload.time)):
        raise MalformedResponseError(messages.MALFORMED_RESPONSE)
    return payload.days(limit)


def fetch_forecast(lat: float, lon: float) -> list[DayForecast]:
    """
    Fetch the daily forecast for a coordinate.

    Args:
        lat: Latitude.
        lon: Longitude.

    Returns:
        At most 3 days, today first.

    Raises:
        HttpError: Non-success status.
        NetworkError: No response at all.
        MalformedResponseError: Response lacks the daily series.
    """
    url = build_forecast_url(lat, lon)
    t0 = time.monotonic()
    try:
        resp = session.get(url)
    except requests.RequestException as e:
        raise NetworkError(messages.NETWORK_ERROR.format(error=e)) from e

    _log.debug("GET %s → %d (%.0fms)", url, resp.status_code, (time.monotonic() - t0) * 1000)
    if not resp.ok:
        raise HttpError(messages.HTTP_ERROR.format(status=resp.status_code), resp.status_code, url)

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(messages.MALFORMED_RESPONSE) from e
    return parse_daily(data)


async def afetch_forecast(lat: float, lon: float) -> list[DayForecast]:
    """``fetch_forecast`` run off the event loop."""
    return await asyncio.to_thread(fetch_forecast, lat, lon)
