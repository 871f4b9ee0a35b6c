"""In-memory HTML implementation of the dashboard UI surfaces.

Each surface just records what the controllers told it; ``render()``
turns the current snapshot into a standalone HTML page. The CLI and the
build flow draw the dashboard with it, and tests use it to inspect what
the user would see.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from weather_dashboard import messages
from weather_dashboard.models import City, ForecastEntry, StatusKind
from weather_dashboard.renderers import render_template


@dataclass
class StatusLine:
    text: str = ""
    kind: StatusKind = StatusKind.INFO

    def set_status(self, text: str, kind: StatusKind) -> None:
        self.text = text
        self.kind = kind


@dataclass
class ForecastGrid:
    entries: list[ForecastEntry] = field(default_factory=list)

    def set_forecast_entries(self, entries: Sequence[ForecastEntry]) -> None:
        self.entries = list(entries)


@dataclass
class LocationCard:
    """Status line + forecast grid; ``city`` is set for extra-city cards."""

    status: StatusLine = field(default_factory=StatusLine)
    forecast: ForecastGrid = field(default_factory=ForecastGrid)
    city: City | None = None


@dataclass
class SuggestionField:
    """A text input, its suggestion list and its inline error."""

    input_id: str
    value: str = ""
    suggestions: list[City] = field(default_factory=list)
    error: str = ""

    @property
    def suggestions_visible(self) -> bool:
        return bool(self.suggestions)

    def set_value(self, text: str) -> None:
        self.value = text

    def render_suggestions(self, cities: Sequence[City]) -> None:
        self.suggestions = list(cities)

    def hide_suggestions(self) -> None:
        self.suggestions = []

    def set_error(self, text: str) -> None:
        self.error = text


class HtmlDashboardPage:
    """Implements ``ui.PageSurface``."""

    def __init__(self) -> None:
        self.main = LocationCard()
        self.main_title = ""
        self.city_field = SuggestionField("city-input")
        self.modal_field = SuggestionField("modal-city-input")
        self.modal_visible = False
        self.cards: dict[int, LocationCard] = {}

    def set_main_title(self, text: str) -> None:
        self.main_title = text

    def show_main_city_modal(self) -> None:
        self.modal_visible = True

    def hide_main_city_modal(self) -> None:
        self.modal_visible = False

    def add_city_card(self, city: City) -> LocationCard:
        card = LocationCard(city=city)
        self.cards[city.id] = card
        return card

    def remove_city_card(self, city_id: int) -> None:
        self.cards.pop(city_id, None)

    def clear_city_cards(self) -> None:
        self.cards.clear()

    def city_card_ids(self) -> list[int]:
        return list(self.cards)

    def city_card(self, city_id: int) -> LocationCard | None:
        return self.cards.get(city_id)

    def render(self, updated: datetime | None = None) -> str:
        """Full HTML page for the current snapshot."""
        updated = updated or datetime.now()
        return render_template(
            "base.html.j2",
            updated=updated.strftime("%d.%m.%Y %H:%M"),
            main_title=self.main_title,
            main_status=self.main.status,
            main_forecast=build_forecast_html(self.main.forecast.entries),
            city_suggestions=build_suggestions_html(self.city_field),
            city_field=self.city_field,
            city_cards=[build_city_card_html(card) for card in self.cards.values()],
            modal_visible=self.modal_visible,
            modal_suggestions=build_suggestions_html(self.modal_field),
            modal_field=self.modal_field,
        )


def build_forecast_html(entries: Sequence[ForecastEntry]) -> str:
    """Forecast grid with one day card per entry."""
    return render_template("forecast_grid.html.j2", entries=entries)


def build_city_card_html(card: LocationCard) -> str:
    """Extra-city card: header with remove control, status line, forecast grid."""
    if card.city is None:
        msg = "Only extra-city cards carry a city"
        raise ValueError(msg)
    return render_template(
        "city_card.html.j2",
        city=card.city,
        status=card.status,
        forecast_html=build_forecast_html(card.forecast.entries),
        remove_title=messages.REMOVE_CITY,
    )


def build_suggestions_html(field_: SuggestionField) -> str:
    """Suggestion list for an input (hidden when empty)."""
    return render_template(
        "suggestions.html.j2",
        list_id=f"{field_.input_id}-suggestions",
        suggestions=field_.suggestions,
    )
