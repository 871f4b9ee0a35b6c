"""
Prefect flow for building a static dashboard page.

Loads the persisted state, renders the main location and every extra city
exactly like the interactive dashboard does, and writes the snapshot to
``<site_dir>/index.html``.

Run locally:
    python -m weather_dashboard.flows.build
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING, Any

from prefect import flow, task

from weather_dashboard.config import get_settings
from weather_dashboard.dashboard import Dashboard
from weather_dashboard.renderers.page import HtmlDashboardPage
from weather_dashboard.store import JsonFileStorage, StateStore

if TYPE_CHECKING:
    from pathlib import Path

    from weather_dashboard.models import AppState


async def snapshot_dashboard(
    dashboard: Dashboard, page: HtmlDashboardPage, state: AppState | None = None
) -> str:
    """Bootstrap the dashboard, wait for every forecast, return the page HTML."""
    dashboard.init(state)
    try:
        await dashboard.settle()
    finally:
        dashboard.close()
    return page.render(updated=datetime.now())


@task(name="load-state")
def load_state() -> AppState:
    """Load the persisted dashboard state."""
    settings = get_settings()
    storage = JsonFileStorage(settings.state_file, settings.storage_quota_bytes)
    return StateStore(storage).load()


@task(name="render-dashboard")
def render_dashboard(state: AppState) -> str:
    """Render the whole dashboard for ``state`` (fetches one forecast per location)."""
    page = HtmlDashboardPage()
    dashboard = Dashboard.from_settings(page, get_settings())
    return asyncio.run(snapshot_dashboard(dashboard, page, state))


@task(name="write-site")
def write_site(html: str) -> Path:
    """Write HTML to the site directory."""
    site_dir = get_settings().site_dir
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="build-dashboard", log_prints=True)
def build_dashboard() -> dict[str, Any]:
    """
    Build the static dashboard page.

    This is the main Prefect flow behind ``weather-dashboard build``.
    """
    print("Loading state...")
    state = load_state()
    source = "geolocation" if state.use_geolocation else "main city"
    print(f"Main location from {source}, {len(state.extra_cities)} extra cities")

    print("Rendering dashboard...")
    html = render_dashboard(state)

    print("Writing site...")
    output_path = write_site(html)

    print(f"Site built: {output_path}")
    return {"extra_cities": len(state.extra_cities), "output": str(output_path)}


if __name__ == "__main__":
    result = build_dashboard()
    print(f"Flow complete: {result}")
