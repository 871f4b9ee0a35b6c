"""Tests for date helpers and the HTML page renderer."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from conftest import BERLIN, PARIS

from weather_dashboard.models import City, ForecastEntry, StatusKind
from weather_dashboard.orchestrator import build_forecast_entries
from weather_dashboard.renderers.date_utils import (
    round_half_up,
    short_day_label,
    temperature_range,
)
from weather_dashboard.renderers.page import (
    HtmlDashboardPage,
    LocationCard,
    build_city_card_html,
    build_forecast_html,
    build_suggestions_html,
)


class TestRoundHalfUp:
    """Halves round towards +infinity."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (-2.5, -2), (-0.5, 0), (0.49, 0), (-3.6, -4), (7.0, 7)],
    )
    def test_round(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected

    def test_temperature_range(self) -> None:
        assert temperature_range(-3.4, 5.5) == "-3…6°C"


class TestShortDayLabel:
    """ru-RU short weekday/day/month labels."""

    @pytest.mark.parametrize(
        ("day", "label"),
        [
            (date(2026, 10, 19), "пн, 19 окт."),
            (date(2026, 10, 25), "вс, 25 окт."),
            (date(2026, 5, 1), "пт, 1 мая"),
            (date(2026, 9, 1), "вт, 1 сент."),
        ],
    )
    def test_label(self, day: date, label: str) -> None:
        assert short_day_label(day) == label


class TestCityModel:
    """City equality and display."""

    def test_display_name_with_country(self) -> None:
        assert PARIS.display_name == "Париж (Франция)"

    def test_display_name_without_country(self) -> None:
        assert City(id=1, name="Atlantis", country="", lat=0, lon=0).display_name == "Atlantis"

    def test_equality_by_id(self) -> None:
        assert City(id=PARIS.id, name="Paris", country="France", lat=0, lon=0) == PARIS
        assert PARIS != BERLIN

    def test_status_css_class(self) -> None:
        assert StatusKind.INFO.css_class == "status"
        assert StatusKind.LOADING.css_class == "status status--loading"
        assert StatusKind.ERROR.css_class == "status status--error"


def sample_entries() -> list[ForecastEntry]:
    return [
        ForecastEntry(date(2026, 10, 19), "Сегодня", "-2…5°C", "Пасмурно", is_today=True),
        ForecastEntry(date(2026, 10, 20), "вт, 20 окт.", "-1…6°C", "Дождь"),
    ]


class TestFragments:
    """HTML fragments."""

    def test_forecast_grid(self) -> None:
        html = build_forecast_html(sample_entries())
        assert 'class="forecast-grid"' in html
        assert html.count("data-date=") == 2
        assert "forecast-day--today" in html
        assert 'data-date="2026-10-19"' in html
        assert "вт, 20 окт." in html
        assert "-1…6°C" in html

    def test_empty_grid(self) -> None:
        html = build_forecast_html([])
        assert "forecast-day" not in html

    def test_city_card(self) -> None:
        card = LocationCard(city=PARIS)
        card.status.set_status("Прогноз успешно загружен", StatusKind.INFO)
        card.forecast.set_forecast_entries(sample_entries())

        html = build_city_card_html(card)
        assert f'data-city-id="{PARIS.id}"' in html
        assert "Париж (Франция)" in html
        assert 'title="Удалить город"' in html
        assert "Прогноз успешно загружен" in html
        assert "Пасмурно" in html

    def test_city_card_requires_city(self) -> None:
        with pytest.raises(ValueError, match="city"):
            build_city_card_html(LocationCard())

    def test_city_name_is_escaped(self) -> None:
        card = LocationCard(city=City(id=9, name="<b>X</b>", country="", lat=0, lon=0))
        html = build_city_card_html(card)
        assert "<b>X</b>" not in html
        assert "&lt;b&gt;X&lt;/b&gt;" in html

    def test_suggestions(self) -> None:
        page = HtmlDashboardPage()
        page.city_field.render_suggestions([PARIS, BERLIN])
        html = build_suggestions_html(page.city_field)
        assert 'id="city-input-suggestions"' in html
        assert "suggestions--hidden" not in html
        assert "Париж (Франция)" in html
        assert f'data-city-id="{BERLIN.id}"' in html

    def test_hidden_suggestions(self) -> None:
        page = HtmlDashboardPage()
        html = build_suggestions_html(page.modal_field)
        assert "suggestions--hidden" in html


class TestHtmlDashboardPage:
    """Full page snapshot."""

    def test_render_full_page(self) -> None:
        page = HtmlDashboardPage()
        page.set_main_title("Текущее местоположение")
        page.main.status.set_status("Загрузка прогноза...", StatusKind.LOADING)
        card = page.add_city_card(BERLIN)
        card.forecast.set_forecast_entries(build_forecast_entries([]))

        html = page.render(updated=datetime(2026, 10, 18, 9, 5))

        assert html.startswith("<!DOCTYPE html>")
        assert "Обновлено: 18.10.2026 09:05" in html
        assert "Текущее местоположение" in html
        assert 'class="status status--loading"' in html
        assert "Берлин (Германия)" in html
        assert 'class="modal-overlay modal-overlay--hidden"' in html

    def test_modal_visible(self) -> None:
        page = HtmlDashboardPage()
        page.show_main_city_modal()
        assert 'class="modal-overlay"' in page.render()
        page.hide_main_city_modal()
        assert 'class="modal-overlay modal-overlay--hidden"' in page.render()

    def test_field_error_rendered(self) -> None:
        page = HtmlDashboardPage()
        page.city_field.set_error("Введите название города.")
        assert "Введите название города." in page.render()

    def test_cards_in_insertion_order(self) -> None:
        page = HtmlDashboardPage()
        page.add_city_card(PARIS)
        page.add_city_card(BERLIN)
        assert page.city_card_ids() == [PARIS.id, BERLIN.id]
        html = page.render()
        assert html.index("Париж") < html.index("Берлин")

    def test_remove_and_clear(self) -> None:
        page = HtmlDashboardPage()
        page.add_city_card(PARIS)
        page.add_city_card(BERLIN)
        page.remove_city_card(PARIS.id)
        assert page.city_card(PARIS.id) is None
        page.clear_city_cards()
        assert page.city_card_ids() == []
