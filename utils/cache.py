"""Lightweight in-memory TTL cache for memoised derived views.

The analytics page recomputes three series and three charts from the current
record snapshot. Results are cached here, keyed on the store version, so
repeated page loads and API calls reuse them until a record changes or the
entry expires.
"""

import time
import threading
from typing import Any


class TTLCache:
    """Thread-safe in-memory cache with time-to-live (TTL) expiry.

    Entries expire after ``ttl_seconds`` seconds. A maximum of ``maxsize``
    entries are retained; when the cache is full the entry closest to
    expiry is evicted.

    Usage::

        cache = TTLCache(maxsize=64, ttl_seconds=60)
        cache.set(("charts", 3), charts)
        charts = cache.get(("charts", 3))  # None once expired or evicted
    """

    def __init__(self, maxsize: int = 128, ttl_seconds: float = 300.0) -> None:
        self._maxsize = maxsize
        self._ttl = ttl_seconds
        # key -> (value, expires_at)
        self._store: dict[Any, tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: Any) -> Any | None:
        """Return cached value for *key*, or ``None`` if absent or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            value, expires_at = entry
            if time.monotonic() > expires_at:
                del self._store[key]
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: Any, value: Any) -> None:
        """Store *value* under *key* with the configured TTL."""
        expires_at = time.monotonic() + self._ttl
        with self._lock:
            if key not in self._store and len(self._store) >= self._maxsize:
                soonest = min(self._store, key=lambda k: self._store[k][1])
                del self._store[soonest]
            self._store[key] = (value, expires_at)

    def get_or_compute(self, key: Any, compute) -> Any:
        """Return the cached value for *key*, computing and storing it on a miss."""
        value = self.get(key)
        if value is None:
            value = compute()
            self.set(key, value)
        return value

    def clear(self) -> None:
        """Remove all entries and reset the counters."""
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> dict[str, int]:
        """Return ``hits``, ``misses`` and live ``size``."""
        with self._lock:
            now = time.monotonic()
            expired = [k for k, (_, exp) in self._store.items() if now > exp]
            for k in expired:
                del self._store[k]
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._store),
            }
