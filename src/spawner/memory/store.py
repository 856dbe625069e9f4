"""
Persistent project memory.

A small key/value store shared across sessions, kept as one JSON object
keyed by entry key::

    {"stack": {"key": "stack", "value": "nextjs", "timestamp": 1735689600000}}
"""

from __future__ import annotations

import dataclasses as _dataclasses
import json as _json
import logging as _logging
import pathlib as _pathlib
import threading as _threading
import time as _time
import typing as _typing

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class MemoryEntry:
    """One remembered value. ``timestamp`` is epoch milliseconds."""

    key: str
    value: str
    timestamp: int

    @classmethod
    def from_dict(cls, data: dict[str, _typing.Any]) -> MemoryEntry:
        return cls(
            key=str(data["key"]),
            value=str(data.get("value", "")),
            timestamp=int(data.get("timestamp", 0)),
        )

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return _dataclasses.asdict(self)


class ProjectMemory:
    """
    JSON-file backed key/value memory.

    The file is read once at construction; every ``set`` writes the whole
    store back. A missing or corrupt file starts an empty store.
    """

    def __init__(
        self,
        path: _pathlib.Path | str,
        *,
        clock: _typing.Callable[[], float] = _time.time,
    ) -> None:
        """
        Initialize project memory.

        Args:
            path: JSON file location (parent dirs are created on save).
            clock: Returns seconds since the epoch; injectable for tests.
        """
        self._path = _pathlib.Path(path).expanduser()
        self._clock = clock
        self._entries: dict[str, MemoryEntry] = {}
        # Tool calls run in worker threads; writes are serialized
        self._lock = _threading.Lock()
        self._load()

    @property
    def path(self) -> _pathlib.Path:
        """Backing file path."""
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = _json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            self._entries = {
                str(key): MemoryEntry.from_dict(value)
                for key, value in data.items()
                if isinstance(value, dict) and "key" in value
            }
        except (OSError, ValueError, TypeError) as e:
            _logger.error("Failed to load memory from %s: %s", self._path, e)
            self._entries = {}

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = {key: entry.to_dict() for key, entry in self._entries.items()}
            self._path.write_text(_json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            _logger.error("Failed to save memory to %s: %s", self._path, e)

    def set(self, key: str, value: str) -> MemoryEntry:
        """
        Store a value and persist the store.

        Save failures are logged; the entry is kept in memory either way.
        """
        entry = MemoryEntry(key=key, value=value, timestamp=int(self._clock() * 1000))
        with self._lock:
            self._entries[key] = entry
            self._save()
        return entry

    def get(self, key: str) -> MemoryEntry | None:
        """Get an entry by key."""
        return self._entries.get(key)

    def list(self) -> list[MemoryEntry]:
        """All entries, newest first."""
        return sorted(self._entries.values(), key=lambda e: e.timestamp, reverse=True)

    def __len__(self) -> int:
        return len(self._entries)
