"""Pure ``AppState`` transitions.

Each function takes the current state and returns a new one; nothing here
touches storage or the UI. ``add_extra_city`` is the only one that can
refuse a change, by raising ``ValidationError`` with the message to show.
"""

from __future__ import annotations

from dataclasses import replace

from weather_dashboard import messages
from weather_dashboard.errors import ValidationError
from weather_dashboard.models import AppState, City


def find_extra_city(state: AppState, city_id: int) -> City | None:
    """The extra city with ``city_id``, if any."""
    for city in state.extra_cities:
        if city.id == city_id:
            return city
    return None


def add_extra_city(state: AppState, city: City) -> AppState:
    """Append ``city`` to the extra cities.

    Raises:
        ValidationError: The city is already an extra city, or it is the main
            city while the main location is not geolocation-based.
    """
    if find_extra_city(state, city.id) is not None:
        raise ValidationError(messages.CITY_ALREADY_ADDED)
    if not state.use_geolocation and state.main_city is not None and state.main_city.id == city.id:
        raise ValidationError(messages.CITY_IS_MAIN)
    return replace(state, extra_cities=(*state.extra_cities, city))


def remove_extra_city(state: AppState, city_id: int) -> AppState:
    """Drop the extra city with ``city_id`` (no-op when absent)."""
    return replace(state, extra_cities=tuple(c for c in state.extra_cities if c.id != city_id))


def choose_main_city(state: AppState, city: City) -> AppState:
    """Switch the main location to a manually chosen city."""
    return replace(state, use_geolocation=False, main_city=city)


def geolocation_granted(state: AppState) -> AppState:
    """Main location follows the device; the stored main city is forgotten."""
    return replace(state, use_geolocation=True, main_city=None)


def geolocation_unavailable(state: AppState) -> AppState:
    """Geolocation denied or missing; the user has to pick a city."""
    return replace(state, use_geolocation=False)
