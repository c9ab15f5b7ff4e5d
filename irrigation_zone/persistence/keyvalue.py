"""
Key/Value Store Module
======================

String-keyed storage backends for the plan.

Design:
- Protocol interface (injectable, no ambient global storage)
- MemoryKeyValueStore for tests and embedding
- JsonFileKeyValueStore: one JSON object {key: string} per file,
  written through a temp file + os.replace
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Set, Union


class KeyValueStore(Protocol):
    """Protocol for string key/value stores (interface)."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a string value."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key (no-op when absent)."""
        ...


class MemoryKeyValueStore:
    """Dict-backed store."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Set[str]:
        return set(self._data)

    def __len__(self) -> int:
        return len(self._data)


class JsonFileKeyValueStore:
    """
    File-backed store holding one JSON object of string values.

    A missing, unreadable or malformed file reads as an empty store; the
    next write replaces it.

    Example:
        store = JsonFileKeyValueStore(Path("irrigation_plan.json"))
        store.set("irrigationPixelRatio", "0.05")
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
