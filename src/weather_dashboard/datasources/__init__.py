"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs and constants
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Fetch functions are synchronous and go through the shared session in
``services/http.py``; each has an ``a``-prefixed twin that runs it in a
worker thread so the dashboard's event loop never blocks::

    from weather_dashboard.services.http import session

    def fetch_something(lat, lon) -> list[Thing]:
        resp = session.get(build_url(lat, lon))
        if not resp.ok:
            raise HttpError(...)
        return parse(resp.json())

Sources:
  - weather/    Open-Meteo forecast + WMO weather code table
  - geocoding/  Open-Meteo city search
"""
