"""JSON-file key/value store with per-edit atomic commits."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional

from chat_prefs.paths import resolve_data_dir

LOGGER = logging.getLogger("CYCB.Chat.Prefs")

Listener = Callable[[Mapping[str, Any]], None]


class JsonKeyValueStore:
    """Flat key/value mapping persisted as one JSON object.

    ``edit`` is the only write path: the callback mutates a copy of the current
    data under the store lock and the result replaces the file atomically.
    A missing or malformed file reads as an empty mapping.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

    @property
    def path(self) -> Path:
        return self._path

    # Reads ---------------------------------------------------------------

    def _read(self) -> Dict[str, Any]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            LOGGER.warning("Unable to read preference store %s: %s", self._path, exc)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning("Preference store %s is not valid JSON; treating as empty", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def data(self) -> Dict[str, Any]:
        with self._lock:
            return self._read()

    def get(self, key: str, default: Any = None) -> Any:
        return self.data().get(key, default)

    # Writes --------------------------------------------------------------

    def edit(self, transform: Callable[[MutableMapping[str, Any]], None]) -> Dict[str, Any]:
        """Run a read-modify-write transaction and return the committed data."""
        with self._lock:
            current = self._read()
            transform(current)
            self._write(current)
            snapshot = dict(current)
        self._notify(snapshot)
        return snapshot

    def set(self, key: str, value: Any) -> None:
        self.edit(lambda data: data.__setitem__(key, value))

    def remove(self, key: str) -> None:
        self.edit(lambda data: data.pop(key, None))

    def _write(self, data: Mapping[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    # Observation ---------------------------------------------------------

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for post-commit snapshots; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def _remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _remove

    def _notify(self, snapshot: Mapping[str, Any]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as exc:
                LOGGER.debug("Preference listener failed: %s", exc, exc_info=exc)


def open_store(name: str, data_dir: Optional[Path] = None) -> JsonKeyValueStore:
    """Open the named store (``settings`` -> ``settings.json``) under the data dir."""
    if data_dir is None:
        data_dir = resolve_data_dir()
    return JsonKeyValueStore(Path(data_dir) / f"{name}.json")
