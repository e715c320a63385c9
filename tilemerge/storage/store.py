# -*- coding: utf-8 -*-
"""
Key-value stores holding the persisted game data.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    String key-value store surviving between sessions.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Value stored under ``key``, None when missing."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class MemoryStore(KeyValueStore):
    """
    Store kept in a dictionary, lost when the process exits.
    """

    def __init__(self, data: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    The file is read once on construction and rewritten after every change.
    An unreadable or malformed file is treated as an empty store.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Parameters
        ----------
        path : str | Path
            Location of the JSON file; parent directories are created on first write.
        """
        self.path = Path(path)
        self._data: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            logger.warning('Ignoring unreadable store %s: %s', self.path, error)
            return {}
        if not isinstance(data, dict):
            logger.warning('Ignoring store %s: expected a JSON object', self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2), encoding='utf-8')

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._write()
