"""Open-Meteo geocoding data source (city name search).

Public API:
  - search: build_search_url, search_cities, asearch_cities, parse_results
  - client: API URL, language, default result count
"""

from weather_dashboard.datasources.geocoding.client import DEFAULT_LIMIT, GEOCODING_API
from weather_dashboard.datasources.geocoding.search import (
    asearch_cities,
    build_search_url,
    parse_results,
    search_cities,
)

__all__ = [
    "DEFAULT_LIMIT",
    "GEOCODING_API",
    "asearch_cities",
    "build_search_url",
    "parse_results",
    "search_cities",
]
