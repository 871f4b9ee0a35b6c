"""City name search for the autocomplete fields."""

from __future__ import annotations

import asyncio
import time
from urllib.parse import urlencode

import pydantic
import requests

from weather_dashboard import messages
from weather_dashboard.datasources.geocoding.client import DEFAULT_LIMIT, GEOCODING_API, LANGUAGE
from weather_dashboard.errors import HttpError, MalformedResponseError, NetworkError
from weather_dashboard.log import get_logger
from weather_dashboard.models import City
from weather_dashboard.schemas import GeocodingResult
from weather_dashboard.services.http import session

_log = get_logger("datasources.geocoding")


def build_search_url(query: str, limit: int = DEFAULT_LIMIT) -> str:
    """Search URL for a (trimmed) query."""
    params = {
        "name": query.strip(),
        "count": str(limit),
        "language": LANGUAGE,
        "format": "json",
    }
    return f"{GEOCODING_API}?{urlencode(params)}"


def parse_results(data: object) -> list[City]:
    """Map the raw ``results`` array to cities, skipping unusable entries."""
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return []

    cities: list[City] = []
    for item in results:
        try:
            cities.append(GeocodingResult.model_validate(item).to_city())
        except pydantic.ValidationError:
            _log.debug("Skipping geocoding result without id/name/coordinates: %r", item)
    return cities


def search_cities(query: str, limit: int = DEFAULT_LIMIT) -> list[City]:
    """
    Search cities by name.

    Blank queries return ``[]`` without touching the network.

    Raises:
        HttpError: Non-success status.
        NetworkError: No response at all.
        MalformedResponseError: Body is not JSON.
    """
    if not query.strip():
        return []

    url = build_search_url(query, limit)
    t0 = time.monotonic()
    try:
        resp = session.get(url)
    except requests.RequestException as e:
        raise NetworkError(messages.NETWORK_ERROR.format(error=e)) from e

    _log.debug("GET %s → %d (%.0fms)", url, resp.status_code, (time.monotonic() - t0) * 1000)
    if not resp.ok:
        raise HttpError(
            messages.GEOCODING_HTTP_ERROR.format(status=resp.status_code), resp.status_code, url
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(messages.MALFORMED_RESPONSE) from e
    return parse_results(data)


async def asearch_cities(query: str, limit: int = DEFAULT_LIMIT) -> list[City]:
    """``search_cities`` run off the event loop."""
    if not query.strip():
        return []
    return await asyncio.to_thread(search_cities, query, limit)
