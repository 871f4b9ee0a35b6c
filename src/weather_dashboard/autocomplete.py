"""Debounced city autocomplete for one text input.

State machine per input::

    IDLE ──keystroke──▶ TYPING ──300 ms quiet──▶ SEARCHING ──results──▶ SUGGESTING
      ▲                   │ blank input                 │ no results        │ select
      └───────────────────┴─────────────────────────────┘                   ▼
                                                                         SELECTED

Every keystroke restarts the debounce timer (trailing edge) and bumps a
sequence number. A search remembers the number it was issued under and its
results are dropped if the number moved on, so a slow response can never
overwrite suggestions for newer input.

The controller owns the ``PendingSelection`` for its input: it is set when
a suggestion is picked and cleared on every keystroke, so a submitted form
can tell a picked city from free text.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING

from weather_dashboard import messages
from weather_dashboard.datasources.geocoding import asearch_cities
from weather_dashboard.errors import ValidationError, WeatherDashboardError
from weather_dashboard.log import get_logger
from weather_dashboard.models import City, PendingSelection

if TYPE_CHECKING:
    from weather_dashboard.ui import SuggestionSurface

SearchFn = Callable[[str], Awaitable[Sequence[City]]]

DEBOUNCE_SECONDS = 0.3
BLUR_GRACE_SECONDS = 0.15

_log = get_logger("autocomplete")


class AutocompleteState(StrEnum):
    IDLE = "idle"
    TYPING = "typing"
    SEARCHING = "searching"
    SUGGESTING = "suggesting"
    SELECTED = "selected"


class AutocompleteController:
    """Drives one input's suggestion list.

    Must be used from inside a running event loop: timers are scheduled on
    it with ``loop.call_later``.
    """

    def __init__(
        self,
        view: SuggestionSurface,
        search: SearchFn = asearch_cities,
        on_select: Callable[[City], None] | None = None,
        *,
        debounce: float = DEBOUNCE_SECONDS,
        blur_grace: float = BLUR_GRACE_SECONDS,
    ) -> None:
        self.view = view
        self.search = search
        self.on_select = on_select
        self.debounce = debounce
        self.blur_grace = blur_grace

        self.state = AutocompleteState.IDLE
        self.value = ""
        self.pending_selection: PendingSelection | None = None
        self.suggestions: list[City] = []

        self._seq = 0
        self._timer: asyncio.TimerHandle | None = None
        self._blur_timer: asyncio.TimerHandle | None = None
        self._searches: set[asyncio.Task[None]] = set()

    # -- events ---------------------------------------------------------------

    def on_input(self, value: str) -> None:
        """Handle a keystroke: ``value`` is the full input text."""
        self.value = value
        self.pending_selection = None
        self.view.set_error("")
        self._cancel_timer()
        self._seq += 1

        if not value.strip():
            self._hide()
            self.state = AutocompleteState.IDLE
            return

        self.state = AutocompleteState.TYPING
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce, self._start_search, value, self._seq)

    def select(self, city: City) -> None:
        """Pick a suggestion (fires on pointer-down, before the input loses focus)."""
        self._cancel_timer()
        self._seq += 1
        self.value = city.name
        self.view.set_value(city.name)
        self.pending_selection = PendingSelection(
            city_id=city.id, lat=city.lat, lon=city.lon, country=city.country
        )
        self._hide()
        self.view.set_error("")
        self.state = AutocompleteState.SELECTED
        if self.on_select is not None:
            self.on_select(city)

    def on_blur(self) -> None:
        """Hide suggestions shortly after focus loss, leaving time for a pick."""
        if self._blur_timer is not None:
            self._blur_timer.cancel()
        loop = asyncio.get_running_loop()
        self._blur_timer = loop.call_later(self.blur_grace, self._hide_after_blur)

    def reset(self) -> None:
        """Empty the input after a successful submit."""
        self._cancel_timer()
        self._seq += 1
        self.value = ""
        self.view.set_value("")
        self.pending_selection = None
        self._hide()
        self.state = AutocompleteState.IDLE

    def submitted_city(self) -> City:
        """The city a form submit would carry (name taken from the input text).

        Raises:
            ValidationError: The input is blank or no suggestion was picked.
        """
        name = self.value.strip()
        if not name:
            raise ValidationError(messages.ENTER_CITY_NAME)
        sel = self.pending_selection
        if sel is None:
            raise ValidationError(messages.PICK_FROM_SUGGESTIONS)
        return City(id=sel.city_id, name=name, country=sel.country, lat=sel.lat, lon=sel.lon)

    # -- lifecycle ------------------------------------------------------------

    async def wait_idle(self) -> None:
        """Wait for the pending debounce timer and any in-flight search."""
        loop = asyncio.get_running_loop()
        while self._timer is not None or self._searches:
            if self._timer is not None:
                await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))
                await asyncio.sleep(0)
                continue
            await asyncio.gather(*self._searches, return_exceptions=True)

    def close(self) -> None:
        """Cancel timers and in-flight searches."""
        self._cancel_timer()
        if self._blur_timer is not None:
            self._blur_timer.cancel()
            self._blur_timer = None
        for task in self._searches:
            task.cancel()

    # -- internals ------------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start_search(self, query: str, seq: int) -> None:
        self._timer = None
        self.state = AutocompleteState.SEARCHING
        task = asyncio.ensure_future(self._perform_search(query, seq))
        self._searches.add(task)
        task.add_done_callback(self._searches.discard)

    async def _perform_search(self, query: str, seq: int) -> None:
        try:
            results = await self.search(query)
        except WeatherDashboardError as e:
            _log.warning("City search for %r failed: %s", query, e)
            self._search_failed(seq)
            return
        except Exception:
            _log.exception("City search for %r failed unexpectedly", query)
            self._search_failed(seq)
            return

        if seq != self._seq:
            _log.debug("Dropping stale suggestions for %r", query)
            return
        self._show(results)

    def _search_failed(self, seq: int) -> None:
        if seq == self._seq:
            self.state = (
                AutocompleteState.SUGGESTING if self.suggestions else AutocompleteState.IDLE
            )

    def _show(self, cities: Sequence[City]) -> None:
        if not cities:
            self._hide()
            self.state = AutocompleteState.IDLE
            return
        self.suggestions = list(cities)
        self.view.render_suggestions(self.suggestions)
        self.state = AutocompleteState.SUGGESTING

    def _hide(self) -> None:
        self.suggestions = []
        self.view.hide_suggestions()

    def _hide_after_blur(self) -> None:
        self._blur_timer = None
        self._hide()
        if self.state is AutocompleteState.SUGGESTING:
            self.state = AutocompleteState.IDLE
