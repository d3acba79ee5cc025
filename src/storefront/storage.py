"""Device-local key-value storage.

The browser keeps the guest cart and the last receipt in local storage.
Here that storage is a port with two adapters: an in-memory dict for tests
and short-lived sessions, and a JSON file for a device that should keep
its cart across restarts. Values are JSON-serializable objects.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str):
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the key; a missing key is not an error."""
        ...


class MemoryStorage(KeyValueStore):
    def __init__(self, initial: dict | None = None) -> None:
        # Values are stored serialized so callers never share mutable state with the store.
        self._data: dict[str, str] = {key: json.dumps(value) for key, value in (initial or {}).items()}

    def get(self, key: str):
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value) -> None:
        self._data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStorage(KeyValueStore):
    """Key-value store persisted as one JSON object in a file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Local storage file is corrupt, starting empty", path=str(self.path))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str):
        return self._read().get(key)

    def set(self, key: str, value) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
