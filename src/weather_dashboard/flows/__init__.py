"""
Prefect flows.

Flows:
- build: Render the dashboard for the stored state into a static HTML page

Usage (local):
    python -m weather_dashboard.flows.build

Usage (CLI):
    weather-dashboard build
"""
