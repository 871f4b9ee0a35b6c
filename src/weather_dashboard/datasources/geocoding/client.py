"""Open-Meteo geocoding API constants.

API docs: https://open-meteo.com/en/docs/geocoding-api
"""

GEOCODING_API = "https://geocoding-api.open-meteo.com/v1/search"

# City names and countries come back in this language
LANGUAGE = "ru"

DEFAULT_LIMIT = 7
