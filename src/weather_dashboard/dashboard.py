"""City list manager and bootstrap wiring.

``Dashboard`` owns the ``AppState`` value and the two autocomplete inputs
(the add-city form and the main-city modal). Event handlers
(``submit_extra_city``, ``remove_extra_city``, ``submit_main_city``,
``request_geolocation``, ``refresh``) run synchronously on the event loop:
they validate, compute the next state with ``state.py``, persist it and
spawn forecast renders. Spawned renders run independently and unordered.

Usage::

    page = HtmlDashboardPage()
    dashboard = Dashboard.from_settings(page, get_settings())
    dashboard.init()
    await dashboard.settle()
    html = page.render()
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from functools import partial
from typing import TYPE_CHECKING, Any

from weather_dashboard import messages
from weather_dashboard.autocomplete import (
    BLUR_GRACE_SECONDS,
    DEBOUNCE_SECONDS,
    AutocompleteController,
    SearchFn,
)
from weather_dashboard.datasources.geocoding import asearch_cities
from weather_dashboard.datasources.weather import afetch_forecast
from weather_dashboard.errors import GeolocationError, ValidationError
from weather_dashboard.geolocation import (
    GeolocationOptions,
    Geolocator,
    geolocator_from_settings,
    locate,
    options_from_settings,
)
from weather_dashboard.log import get_logger
from weather_dashboard.models import AppState, City, StatusKind
from weather_dashboard.orchestrator import ForecastFetcher, RenderTarget, render_forecast
from weather_dashboard.state import (
    add_extra_city,
    choose_main_city,
    find_extra_city,
    geolocation_granted,
    geolocation_unavailable,
    remove_extra_city,
)
from weather_dashboard.store import JsonFileStorage, StateStore, default_state

if TYPE_CHECKING:
    from weather_dashboard.config import Settings
    from weather_dashboard.ui import CardSurface, PageSurface

_log = get_logger("dashboard")


class Dashboard:
    """The whole page's behaviour, independent of how it is drawn."""

    def __init__(
        self,
        page: PageSurface,
        store: StateStore,
        *,
        fetch: ForecastFetcher = afetch_forecast,
        search: SearchFn = asearch_cities,
        geolocator: Geolocator | None = None,
        geolocation_options: GeolocationOptions | None = None,
        debounce: float = DEBOUNCE_SECONDS,
        blur_grace: float = BLUR_GRACE_SECONDS,
    ) -> None:
        self.page = page
        self.store = store
        self.fetch = fetch
        self.geolocator = geolocator
        self.geolocation_options = geolocation_options or GeolocationOptions()
        self.state: AppState = default_state()

        self.city_input = AutocompleteController(
            page.city_field, search, debounce=debounce, blur_grace=blur_grace
        )
        self.modal_input = AutocompleteController(
            page.modal_field, search, debounce=debounce, blur_grace=blur_grace
        )
        self._tasks: set[asyncio.Task[Any]] = set()

    @classmethod
    def from_settings(cls, page: PageSurface, settings: Settings) -> Dashboard:
        """Wire file-backed storage, search limit, timers and geolocation from settings."""
        storage = JsonFileStorage(settings.state_file, settings.storage_quota_bytes)
        return cls(
            page,
            StateStore(storage),
            search=partial(asearch_cities, limit=settings.search_limit),
            geolocator=geolocator_from_settings(settings),
            geolocation_options=options_from_settings(settings),
            debounce=settings.debounce_ms / 1000,
            blur_grace=settings.blur_grace_ms / 1000,
        )

    # =========================================================================
    # Bootstrap
    # =========================================================================

    def load(self) -> AppState:
        """Replace the in-memory state with the persisted one."""
        self.state = self.store.load()
        return self.state

    def init(self, state: AppState | None = None) -> None:
        """Render the initial page (call inside the event loop).

        ``state`` replaces reading the store when the caller already loaded it.
        """
        if state is None:
            self.load()
        else:
            self.state = state

        if self.state.use_geolocation:
            self.request_geolocation()
        elif self.state.main_city is not None:
            self.render_main_city()
        else:
            self.page.main.status.set_status(messages.CHOOSE_MAIN_CITY, StatusKind.INFO)
            self.page.show_main_city_modal()

        self.rerender_extra_cities()

    async def settle(self) -> None:
        """Wait until every spawned render/geolocation request has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        self.city_input.close()
        self.modal_input.close()
        for task in self._tasks:
            task.cancel()

    # =========================================================================
    # Extra cities
    # =========================================================================

    def submit_extra_city(self) -> City | None:
        """Handle the add-city form. Returns the added city, or None on a validation error."""
        field = self.page.city_field
        try:
            city = self.city_input.submitted_city()
            new_state = add_extra_city(self.state, city)
        except ValidationError as e:
            field.set_error(str(e))
            return None

        self._commit(new_state)
        field.set_error("")
        self.city_input.reset()
        self._add_card(city)
        return city

    def remove_extra_city(self, city_id: int) -> None:
        """Drop a city and its card, immediately."""
        self._commit(remove_extra_city(self.state, city_id))
        self.page.remove_city_card(city_id)

    def rerender_extra_cities(self) -> None:
        self.page.clear_city_cards()
        for city in self.state.extra_cities:
            self._add_card(city)

    def _add_card(self, city: City) -> None:
        card = self.page.add_city_card(city)
        self._render(city.lat, city.lon, card)

    # =========================================================================
    # Main location
    # =========================================================================

    def submit_main_city(self) -> City | None:
        """Handle the main-city modal form."""
        field = self.page.modal_field
        try:
            city = self.modal_input.submitted_city()
        except ValidationError as e:
            field.set_error(str(e))
            return None

        self._commit(choose_main_city(self.state, city))
        self.page.hide_main_city_modal()
        field.set_error("")
        self.modal_input.reset()
        self.render_main_city()
        return city

    def render_main_city(self) -> asyncio.Task[bool] | None:
        city = self.state.main_city
        main = self.page.main
        if city is None:
            main.status.set_status(messages.NO_MAIN_CITY, StatusKind.ERROR)
            return None

        self.page.set_main_title(city.display_name)
        return self._render(city.lat, city.lon, main)

    def request_geolocation(self) -> asyncio.Task[None] | None:
        """Ask for the device position and render its forecast.

        Without a geolocation capability, or when the request fails, the
        main-city modal opens instead.
        """
        main = self.page.main
        self.page.set_main_title(messages.CURRENT_LOCATION)
        main.status.set_status(messages.LOCATING, StatusKind.LOADING)
        main.forecast.set_forecast_entries([])

        if self.geolocator is None:
            main.status.set_status(messages.GEOLOCATION_UNSUPPORTED, StatusKind.ERROR)
            self._commit(geolocation_unavailable(self.state))
            self.page.show_main_city_modal()
            return None

        return self._spawn(self._locate_and_render(self.geolocator))

    async def _locate_and_render(self, geolocator: Geolocator) -> None:
        main = self.page.main
        try:
            position = await locate(geolocator, self.geolocation_options)
        except GeolocationError as e:
            _log.warning("Geolocation error (%s): %s", e.reason, e)
            main.status.set_status(messages.GEOLOCATION_FAILED, StatusKind.ERROR)
            self._commit(geolocation_unavailable(self.state))
            self.page.show_main_city_modal()
            return

        self._commit(geolocation_granted(self.state))
        await render_forecast(
            RenderTarget(position.lat, position.lon, main.status, main.forecast), self.fetch
        )

    # =========================================================================
    # Refresh
    # =========================================================================

    def refresh(self) -> None:
        """Re-render the main location and every displayed extra-city card."""
        if self.state.use_geolocation:
            self.request_geolocation()
        elif self.state.main_city is not None:
            self.render_main_city()

        for city_id in self.page.city_card_ids():
            city = find_extra_city(self.state, city_id)
            card = self.page.city_card(city_id)
            if city is None or card is None:
                continue
            self._render(city.lat, city.lon, card)

    # =========================================================================
    # Internals
    # =========================================================================

    def _commit(self, state: AppState) -> None:
        self.state = state
        self.store.save(state)

    def _render(self, lat: float, lon: float, card: CardSurface) -> asyncio.Task[bool]:
        target = RenderTarget(lat, lon, card.status, card.forecast)
        return self._spawn(render_forecast(target, self.fetch))

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            _log.error("Background operation failed", exc_info=task.exception())
