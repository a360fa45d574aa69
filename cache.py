"""TTL cache for loaded schedule snapshots."""

from __future__ import annotations

import threading
import time
from collections.abc import Hashable
from typing import Any, Optional

DEFAULT_TTL_SECONDS = 600  # 10 minutes
DEFAULT_MAX_ENTRIES = 256


class TTLCache:
    """Thread-safe in-memory cache with per-entry TTL and a size bound.

    When full, the entry stored longest ago is dropped first.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: Optional[int] = DEFAULT_MAX_ENTRIES,
    ) -> None:
        self._ttl = ttl_seconds
        self._max = max_entries
        self._store: dict[Hashable, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        """Return cached value if within TTL, else None."""
        with self._lock:
            self._evict_expired()
            entry = self._store.get(key)
            if entry is None:
                return None
            return entry[1]

    def set(self, key: Hashable, value: Any) -> None:
        """Store a value with the current timestamp."""
        with self._lock:
            self._store.pop(key, None)
            self._store[key] = (time.monotonic(), value)
            if self._max is not None:
                while len(self._store) > self._max:
                    del self._store[next(iter(self._store))]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def _evict_expired(self) -> None:
        """Remove entries older than TTL. Must be called under lock."""
        now = time.monotonic()
        expired = [k for k, (ts, _) in self._store.items() if now - ts >= self._ttl]
        for k in expired:
            del self._store[k]

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._store)
