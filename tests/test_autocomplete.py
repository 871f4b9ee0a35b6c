"""Tests for the debounced autocomplete controller.

Timers are shortened to a few milliseconds; each scenario runs inside its
own event loop via ``asyncio.run``.
"""

from __future__ import annotations

import asyncio

import pytest
from conftest import BERLIN, MOSCOW, PARIS, FakeSearch

from weather_dashboard import messages
from weather_dashboard.autocomplete import AutocompleteController, AutocompleteState
from weather_dashboard.errors import NetworkError, ValidationError
from weather_dashboard.models import City
from weather_dashboard.renderers.page import SuggestionField

DEBOUNCE = 0.02
BLUR_GRACE = 0.02


def make_controller(
    search: FakeSearch, on_select: list[City] | None = None
) -> tuple[AutocompleteController, SuggestionField]:
    view = SuggestionField("city-input")
    ctl = AutocompleteController(
        view,
        search,
        on_select=on_select.append if on_select is not None else None,
        debounce=DEBOUNCE,
        blur_grace=BLUR_GRACE,
    )
    return ctl, view


class SlowSearch(FakeSearch):
    """Search whose latency depends on the query."""

    def __init__(self, delays: dict[str, float]) -> None:
        super().__init__()
        self.delays = delays

    async def __call__(self, query: str) -> list[City]:
        self.queries.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        prefix = query.strip().lower()
        return [c for c in self.cities if c.name.lower().startswith(prefix)]


class FailingSearch(FakeSearch):
    async def __call__(self, query: str) -> list[City]:
        self.queries.append(query)
        msg = "Сетевая ошибка: refused"
        raise NetworkError(msg)


class BrokenSearch(FakeSearch):
    async def __call__(self, query: str) -> list[City]:
        self.queries.append(query)
        raise KeyError(query)


class TestDebounce:
    """Typing triggers at most one search per quiet period."""

    def test_restarts_on_every_keystroke(self, fake_search: FakeSearch) -> None:
        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(fake_search)
            ctl.on_input("П")
            ctl.on_input("Па")
            ctl.on_input("Пар")
            assert ctl.state is AutocompleteState.TYPING
            assert fake_search.queries == []
            await ctl.wait_idle()
            return ctl, view

        ctl, view = asyncio.run(scenario())

        assert fake_search.queries == ["Пар"]
        assert view.suggestions == [PARIS]
        assert ctl.state is AutocompleteState.SUGGESTING

    def test_separate_pauses_search_twice(self, fake_search: FakeSearch) -> None:
        async def scenario() -> None:
            ctl, _view = make_controller(fake_search)
            ctl.on_input("Бер")
            await ctl.wait_idle()
            ctl.on_input("Берл")
            await ctl.wait_idle()

        asyncio.run(scenario())
        assert fake_search.queries == ["Бер", "Берл"]

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_input_hides_without_search(self, fake_search: FakeSearch, value: str) -> None:
        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(fake_search)
            ctl.on_input("Мос")
            await ctl.wait_idle()
            assert view.suggestions_visible
            ctl.on_input(value)
            await ctl.wait_idle()
            return ctl, view

        ctl, view = asyncio.run(scenario())

        assert fake_search.queries == ["Мос"]
        assert not view.suggestions_visible
        assert ctl.state is AutocompleteState.IDLE

    def test_no_results_hides_list(self, fake_search: FakeSearch) -> None:
        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(fake_search)
            ctl.on_input("Qwxyz")
            await ctl.wait_idle()
            return ctl, view

        ctl, view = asyncio.run(scenario())
        assert view.suggestions == []
        assert ctl.state is AutocompleteState.IDLE

    def test_search_failure_keeps_input_usable(self) -> None:
        search = FailingSearch()

        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(search)
            ctl.on_input("Пар")
            await ctl.wait_idle()
            return ctl, view

        ctl, view = asyncio.run(scenario())
        assert search.queries == ["Пар"]
        assert view.suggestions == []
        assert ctl.state is AutocompleteState.IDLE


    def test_unexpected_search_error_is_contained(self, caplog: pytest.LogCaptureFixture) -> None:
        search = BrokenSearch()

        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(search)
            ctl.on_input("Пар")
            await ctl.wait_idle()
            return ctl, view

        ctl, view = asyncio.run(scenario())
        assert view.suggestions == []
        assert ctl.state is AutocompleteState.IDLE
        assert "failed unexpectedly" in caplog.text


class TestStaleResults:
    """Late responses never overwrite newer suggestions."""

    def test_slow_earlier_search_is_dropped(self) -> None:
        search = SlowSearch({"Бер": 0.1})

        async def scenario() -> SuggestionField:
            ctl, view = make_controller(search)
            ctl.on_input("Бер")
            await asyncio.sleep(DEBOUNCE * 2)  # first search is now in flight
            assert ctl.state is AutocompleteState.SEARCHING
            ctl.on_input("Мос")
            await ctl.wait_idle()
            return view

        view = asyncio.run(scenario())

        assert search.queries == ["Бер", "Мос"]
        assert view.suggestions == [MOSCOW]

    def test_select_discards_in_flight_search(self) -> None:
        search = SlowSearch({"Бер": 0.05})

        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(search)
            ctl.on_input("Бер")
            await asyncio.sleep(DEBOUNCE * 2)
            ctl.select(BERLIN)
            await ctl.wait_idle()
            return ctl, view

        ctl, view = asyncio.run(scenario())
        assert view.suggestions == []
        assert ctl.state is AutocompleteState.SELECTED


class TestSelection:
    """Picking a suggestion and submitting the form."""

    def test_select(self, fake_search: FakeSearch) -> None:
        picked: list[City] = []

        async def scenario() -> tuple[AutocompleteController, SuggestionField]:
            ctl, view = make_controller(fake_search, on_select=picked)
            ctl.on_input("Пар")
            await ctl.wait_idle()
            ctl.select(view.suggestions[0])
            return ctl, view

        ctl, view = asyncio.run(scenario())

        assert view.value == "Париж"
        assert view.suggestions == []
        assert ctl.state is AutocompleteState.SELECTED
        assert ctl.pending_selection is not None
        assert ctl.pending_selection.city_id == PARIS.id
        assert ctl.pending_selection.country == "Франция"
        assert picked == [PARIS]

    def test_submitted_city(self) -> None:
        ctl, _view = make_controller(FakeSearch())
        ctl.select(PARIS)
        city = ctl.submitted_city()
        assert city == PARIS
        assert city.name == "Париж"
        assert (city.lat, city.lon) == (PARIS.lat, PARIS.lon)

    def test_select_cancels_pending_search(self, fake_search: FakeSearch) -> None:
        async def scenario() -> None:
            ctl, _view = make_controller(fake_search)
            ctl.on_input("Пар")
            ctl.select(PARIS)
            await asyncio.sleep(DEBOUNCE * 2)
            await ctl.wait_idle()

        asyncio.run(scenario())
        assert fake_search.queries == []

    def test_typing_after_select_clears_selection(self, fake_search: FakeSearch) -> None:
        async def scenario() -> AutocompleteController:
            ctl, _view = make_controller(fake_search)
            ctl.select(PARIS)
            ctl.on_input("Париж!")
            ctl.close()
            return ctl

        ctl = asyncio.run(scenario())
        assert ctl.pending_selection is None
        with pytest.raises(ValidationError) as exc_info:
            ctl.submitted_city()
        assert str(exc_info.value) == messages.PICK_FROM_SUGGESTIONS

    def test_blank_submit(self) -> None:
        ctl, _view = make_controller(FakeSearch())
        with pytest.raises(ValidationError) as exc_info:
            ctl.submitted_city()
        assert str(exc_info.value) == messages.ENTER_CITY_NAME

    def test_free_text_submit(self, fake_search: FakeSearch) -> None:
        async def scenario() -> AutocompleteController:
            ctl, _view = make_controller(fake_search)
            ctl.on_input("Париж")
            ctl.close()
            return ctl

        ctl = asyncio.run(scenario())
        with pytest.raises(ValidationError, match="выпадающего списка"):
            ctl.submitted_city()

    def test_keystroke_clears_error(self, fake_search: FakeSearch) -> None:
        async def scenario() -> SuggestionField:
            ctl, view = make_controller(fake_search)
            view.set_error(messages.CITY_ALREADY_ADDED)
            ctl.on_input("Б")
            ctl.close()
            return view

        assert asyncio.run(scenario()).error == ""

    def test_reset(self) -> None:
        ctl, view = make_controller(FakeSearch())
        ctl.select(BERLIN)
        ctl.reset()
        assert view.value == ""
        assert ctl.pending_selection is None
        assert ctl.state is AutocompleteState.IDLE


class TestBlur:
    """Focus loss hides suggestions after a grace period."""

    def test_hides_after_grace(self, fake_search: FakeSearch) -> None:
        async def scenario() -> tuple[AutocompleteController, SuggestionField, bool]:
            ctl, view = make_controller(fake_search)
            ctl.on_input("Мос")
            await ctl.wait_idle()
            ctl.on_blur()
            visible_during_grace = view.suggestions_visible
            await asyncio.sleep(BLUR_GRACE * 3)
            return ctl, view, visible_during_grace

        ctl, view, visible_during_grace = asyncio.run(scenario())
        assert visible_during_grace is True
        assert view.suggestions == []
        assert ctl.state is AutocompleteState.IDLE

    def test_pick_within_grace_wins(self, fake_search: FakeSearch) -> None:
        async def scenario() -> AutocompleteController:
            ctl, view = make_controller(fake_search)
            ctl.on_input("Мос")
            await ctl.wait_idle()
            ctl.on_blur()
            ctl.select(view.suggestions[0])
            await asyncio.sleep(BLUR_GRACE * 3)
            return ctl

        ctl = asyncio.run(scenario())
        assert ctl.state is AutocompleteState.SELECTED
        assert ctl.submitted_city() == MOSCOW
