"""Logging configuration for the dashboard."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(name)-32s %(levelname)-7s %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a console handler to the ``weather_dashboard`` logger.

    Safe to call more than once; the handler is only added the first time.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger("weather_dashboard")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
    for handler in root.handlers:
        handler.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'weather_dashboard.' namespace."""
    return logging.getLogger(f"weather_dashboard.{name}")
