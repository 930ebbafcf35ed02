"""
TtlCache: in-memory key/value store with per-entry expiry.

Keeps the rate-limited SmartOLT feeds under their hourly quota. Entries are
evicted lazily on read; there is no background sweep. Contents are not
persisted, a restart simply costs one refetch per feed.

This is a pure data primitive with no HA or network dependencies.
"""
from __future__ import annotations

import time
from typing import Any, Callable


class TtlCache:
    """Process-local cache; one instance is owned by each SmartOltClient."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        # key → (value, expiry timestamp in clock seconds)
        self._store: dict[str, tuple[Any, float]] = {}
        self._clock = clock

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when absent or expired."""
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expiry = entry
        if self._clock() > expiry:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store value under key for ttl seconds."""
        self._store[key] = (value, self._clock() + ttl)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._store)
