"""Open-Meteo forecast API constants.

API docs: https://open-meteo.com/en/docs
"""

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"

# Daily variables we request, in the order the API documents them
DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "weathercode",
]

FORECAST_DAYS = 3
