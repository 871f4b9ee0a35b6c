"""Persisted application state.

The dashboard keeps one JSON document (``AppState``) in a single
string-keyed slot of a key-value storage, the same way a browser page
keeps it in local storage:

  - ``KeyValueStorage``: the substrate protocol (get/set/remove a string slot)
  - ``MemoryStorage``: dict-backed, for tests and throwaway sessions
  - ``JsonFileStorage``: every slot in one JSON object on disk, with a quota
  - ``StateStore``: loads/saves ``AppState`` and never raises to its caller

Reading is tolerant: a missing slot, malformed JSON or an unexpected shape
falls back to the default state. Writing failures are logged and swallowed;
the in-memory state stays authoritative.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

import pydantic

from weather_dashboard.errors import PersistenceError
from weather_dashboard.log import get_logger
from weather_dashboard.models import AppState, City
from weather_dashboard.schemas import CityRecord, StoredState

STORAGE_KEY = "weatherAppStateV2"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024

_log = get_logger("store")


class KeyValueStorage(Protocol):
    """A string-keyed slot store. Implementations raise ``PersistenceError``."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage backed by a dict."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage:
    """All slots in one JSON object on disk.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written document. ``quota_bytes`` caps the encoded size of
    the whole object.
    """

    def __init__(self, path: Path, quota_bytes: int = DEFAULT_QUOTA_BYTES) -> None:
        self.path = path
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            msg = f"Cannot read storage file {self.path}: {e}"
            raise PersistenceError(msg) from e
        if not isinstance(data, dict):
            msg = f"Storage file {self.path} does not hold a JSON object"
            raise PersistenceError(msg)
        return data

    def _write_all(self, items: dict[str, Any]) -> None:
        encoded = json.dumps(items, ensure_ascii=False, indent=2) + "\n"
        size = len(encoded.encode("utf-8"))
        if size > self.quota_bytes:
            msg = f"Storage quota exceeded ({size} > {self.quota_bytes} bytes)"
            raise PersistenceError(msg)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(encoded)
                Path(tmp).replace(self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            msg = f"Cannot write storage file {self.path}: {e}"
            raise PersistenceError(msg) from e


def default_state() -> AppState:
    """Geolocation on, no main city, no extra cities."""
    return AppState(use_geolocation=True, main_city=None, extra_cities=())


def _coerce_city(raw: Any) -> City | None:
    if not raw:
        return None
    try:
        return CityRecord.model_validate(raw).to_city()
    except pydantic.ValidationError:
        _log.warning("Ignoring malformed stored city: %r", raw)
        return None


def state_from_json(raw: Any) -> AppState | None:
    """Coerce a decoded document into ``AppState``; None if it is not an object."""
    if not isinstance(raw, dict):
        return None

    extra: list[City] = []
    raw_extra = raw.get("extraCities")
    if isinstance(raw_extra, list):
        seen: set[int] = set()
        for item in raw_extra:
            city = _coerce_city(item)
            if city is None or city.id in seen:
                continue
            seen.add(city.id)
            extra.append(city)

    return AppState(
        use_geolocation=bool(raw.get("useGeolocation")),
        main_city=_coerce_city(raw.get("mainCity")),
        extra_cities=tuple(extra),
    )


def state_to_json(state: AppState) -> str:
    """Serialize ``AppState`` with the camelCase keys the slot has always used."""
    stored = StoredState(
        use_geolocation=state.use_geolocation,
        main_city=CityRecord.from_city(state.main_city) if state.main_city else None,
        extra_cities=[CityRecord.from_city(c) for c in state.extra_cities],
    )
    return stored.model_dump_json(by_alias=True)


class StateStore:
    """Loads and saves ``AppState`` in one storage slot."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> AppState:
        """Read the persisted state, falling back to ``default_state()``."""
        try:
            raw = self.storage.get_item(self.key)
        except PersistenceError as e:
            _log.warning("Error reading stored state: %s", e)
            return default_state()

        if not raw:
            return default_state()

        try:
            parsed = json.loads(raw)
        except ValueError as e:
            _log.warning("Error parsing stored state: %s", e)
            return default_state()

        state = state_from_json(parsed)
        if state is None:
            _log.warning("Stored state is not a JSON object, using defaults")
            return default_state()
        return state

    def save(self, state: AppState) -> None:
        """Persist ``state``. Failures are logged, never raised."""
        try:
            self.storage.set_item(self.key, state_to_json(state))
        except PersistenceError as e:
            _log.warning("Error writing stored state: %s", e)
