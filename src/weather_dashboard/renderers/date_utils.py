"""Shared date-formatting helpers for renderers (ru-RU)."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

# Short forms as written by ru-RU date formatters ("пн, 20 окт.")
WEEKDAYS_SHORT = ["пн", "вт", "ср", "чт", "пт", "сб", "вс"]
MONTHS_SHORT = [
    "янв.",
    "февр.",
    "мар.",
    "апр.",
    "мая",
    "июн.",
    "июл.",
    "авг.",
    "сент.",
    "окт.",
    "нояб.",
    "дек.",
]


def short_day_label(day: date) -> str:
    """Weekday, day and month, e.g. ``пн, 20 окт.``."""
    return f"{WEEKDAYS_SHORT[day.weekday()]}, {day.day} {MONTHS_SHORT[day.month - 1]}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (-2.5 → -2, 2.5 → 3)."""
    return math.floor(value + 0.5)


def temperature_range(temp_min: float, temp_max: float) -> str:
    """``-3…5°C``."""
    return f"{round_half_up(temp_min)}…{round_half_up(temp_max)}°C"
