"""
Key-value persistence for tracker data.

The engine only needs get/set/remove on whole values. Two backends are
provided: an in-memory dict (tests, embedding) and a directory with one
JSON file per key. JsonStore layers JSON (de)serialization on top of either.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable byte store addressed by string keys."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Volatile store backed by a dict."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """Keys currently present."""
        return list(self._data)


class FileKeyValueStore:
    """
    Store each key as ``<key>.json`` inside a data directory.

    The directory is created on first write.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the file store.

        Args:
            data_dir: Directory holding one file per key
        """
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._path(key).write_bytes(value)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class JsonStore:
    """
    JSON documents on top of a KeyValueStore.

    A value that is not valid UTF-8 JSON is treated as missing and logged;
    it is overwritten by the next write to the same key.
    """

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def read(self, key: str) -> Any | None:
        """
        Load the document stored under *key*.

        Returns:
            Decoded JSON value, or None if absent or unreadable
        """
        raw = self.kv.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring malformed data under %r: %s", key, e)
            return None

    def write(self, key: str, value: Any) -> None:
        """Serialize *value* and store it under *key*."""
        self.kv.set(key, json.dumps(value, indent=2).encode("utf-8"))

    def remove(self, key: str) -> None:
        """Delete *key* if present."""
        self.kv.remove(key)
