"""UI surfaces the business logic renders into.

Controllers only ever call these methods; how a surface draws itself
(HTML, terminal, test recorder) is up to the implementation. See
``renderers/page.py`` for the HTML one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from weather_dashboard.models import City, ForecastEntry, StatusKind


class StatusSurface(Protocol):
    def set_status(self, text: str, kind: StatusKind) -> None: ...


class ForecastSurface(Protocol):
    def set_forecast_entries(self, entries: Sequence[ForecastEntry]) -> None: ...


class SuggestionSurface(Protocol):
    """A text input with a suggestion list and an inline error line."""

    def set_value(self, text: str) -> None: ...

    def render_suggestions(self, cities: Sequence[City]) -> None: ...

    def hide_suggestions(self) -> None: ...

    def set_error(self, text: str) -> None: ...


class CardSurface(Protocol):
    """A status line + forecast grid pair for one location."""

    @property
    def status(self) -> StatusSurface: ...

    @property
    def forecast(self) -> ForecastSurface: ...


class PageSurface(Protocol):
    """The whole dashboard page."""

    @property
    def main(self) -> CardSurface: ...

    @property
    def city_field(self) -> SuggestionSurface: ...

    @property
    def modal_field(self) -> SuggestionSurface: ...

    def set_main_title(self, text: str) -> None: ...

    def show_main_city_modal(self) -> None: ...

    def hide_main_city_modal(self) -> None: ...

    def add_city_card(self, city: City) -> CardSurface: ...

    def remove_city_card(self, city_id: int) -> None: ...

    def clear_city_cards(self) -> None: ...

    def city_card_ids(self) -> list[int]:
        """Ids of the displayed extra-city cards, in display order."""
        ...

    def city_card(self, city_id: int) -> CardSurface | None: ...
