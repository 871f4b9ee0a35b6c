"""
Shared HTTP client for the Open-Meteo APIs.

``session`` sends a project User-Agent, asks for JSON and applies
``DEFAULT_TIMEOUT`` to every request that does not set its own. Nothing is
retried: a failed fetch becomes an error status on its card and the user
refreshes when they want to.

Usage::

    from weather_dashboard.services.http import session

    resp = session.get(build_forecast_url(lat, lon))
    if not resp.ok:
        raise HttpError(...)
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Redirects are followed; connection, read and status failures are final.
DEFAULT_RETRY = Retry(
    total=None,
    connect=0,
    read=0,
    status=0,
    other=0,
    redirect=5,
    raise_on_status=False,  # callers inspect resp.ok themselves
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "weather-dashboard/0.1 (https://github.com/mihow/weather-dashboard)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> requests.Session:
    """
    Build a ``requests.Session`` for JSON APIs.

    Args:
        retry: Adapter retry policy (defaults to ``DEFAULT_RETRY``).
        timeout: Seconds applied when a request passes no timeout (or ``None``).
        user_agent: ``User-Agent`` header value.
    """
    s = requests.Session()
    s.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    for prefix in ("https://", "http://"):
        s.mount(prefix, adapter)

    # Session.request() forwards timeout=None when the caller gave none.
    send = s.send

    def send_with_timeout(request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return send(request, **kwargs)

    s.send = send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session used by every datasource.
session: requests.Session = create_session()
