"""WMO weather interpretation codes (https://open-meteo.com/en/docs).

Pure conversion functions with no external dependencies. The code sets
below follow the upstream code space exactly; codes outside them map to
``WeatherCategory.UNKNOWN``.
"""

from __future__ import annotations

from enum import StrEnum


class WeatherCategory(StrEnum):
    """Coarse weather categories shown on day cards."""

    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    OVERCAST = "overcast"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    FREEZING_RAIN = "freezing_rain"
    SNOW = "snow"
    SHOWERS = "showers"
    THUNDERSTORM = "thunderstorm"
    THUNDERSTORM_HAIL = "thunderstorm_hail"
    UNKNOWN = "unknown"


_CODE_SETS: list[tuple[frozenset[int], WeatherCategory]] = [
    (frozenset({0}), WeatherCategory.CLEAR),
    (frozenset({1, 2}), WeatherCategory.PARTLY_CLOUDY),
    (frozenset({3}), WeatherCategory.OVERCAST),
    (frozenset({45, 48}), WeatherCategory.FOG),
    (frozenset({51, 53, 55}), WeatherCategory.DRIZZLE),
    (frozenset({61, 63, 65}), WeatherCategory.RAIN),
    (frozenset({66, 67}), WeatherCategory.FREEZING_RAIN),
    (frozenset({71, 73, 75}), WeatherCategory.SNOW),
    (frozenset({80, 81, 82}), WeatherCategory.SHOWERS),
    (frozenset({95}), WeatherCategory.THUNDERSTORM),
    (frozenset({96, 99}), WeatherCategory.THUNDERSTORM_HAIL),
]

WMO_CATEGORIES: dict[int, WeatherCategory] = {
    code: category for codes, category in _CODE_SETS for code in codes
}

CATEGORY_LABELS: dict[WeatherCategory, str] = {
    WeatherCategory.CLEAR: "Ясно",
    WeatherCategory.PARTLY_CLOUDY: "Переменная облачность",
    WeatherCategory.OVERCAST: "Пасмурно",
    WeatherCategory.FOG: "Туман",
    WeatherCategory.DRIZZLE: "Морось",
    WeatherCategory.RAIN: "Дождь",
    WeatherCategory.FREEZING_RAIN: "Ледяной дождь",
    WeatherCategory.SNOW: "Снег",
    WeatherCategory.SHOWERS: "Ливень",
    WeatherCategory.THUNDERSTORM: "Гроза",
    WeatherCategory.THUNDERSTORM_HAIL: "Гроза с градом",
    WeatherCategory.UNKNOWN: "Неизвестная погода",
}


def classify_weather_code(code: int) -> WeatherCategory:
    """Map a WMO weather code to its category."""
    return WMO_CATEGORIES.get(code, WeatherCategory.UNKNOWN)


def describe_weather_code(code: int) -> str:
    """Human-readable description for a WMO weather code."""
    return CATEGORY_LABELS[classify_weather_code(code)]
