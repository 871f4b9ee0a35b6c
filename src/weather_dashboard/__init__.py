"""Weather Dashboard - 3-day forecasts for your location and a list of cities.

Architecture::

    datasources/   External APIs (Open-Meteo forecast, Open-Meteo geocoding)
    store.py       Persisted application state over a key-value slot
    state.py       Pure AppState transitions (add/remove/choose main city)
    autocomplete.py  Debounced city search + suggestion selection per input
    orchestrator.py  Per-location fetch-and-render lifecycle
    dashboard.py   City list manager, geolocation flow, bootstrap wiring
    ui.py          Abstract UI surfaces the business logic talks to
    renderers/     In-memory HTML implementation of the UI surfaces
    flows/         Prefect flow building a static dashboard page
    services/      Shared utilities (HTTP session)

Data flow: store → dashboard → orchestrator → datasources → ui surfaces.
The autocomplete controller talks to the geocoding datasource on its own
and hands selections to the dashboard on submit.
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from weather_dashboard.config import Settings
from weather_dashboard.models import AppState, City, DayForecast

__all__ = ["AppState", "City", "DayForecast", "Settings", "__version__"]
