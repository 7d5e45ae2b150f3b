"""In-memory implementation of CacheStore.

Thread-safe dictionary store for single-process deployments and tests.
Entries optionally expire after a TTL; expired entries are dropped lazily
on lookup.
"""

import time
from threading import Lock


class InMemoryCacheRepository:
    """Dictionary-backed cache store guarded by a lock."""

    def __init__(self, ttl: int = 0) -> None:
        """Initialize the store.

        Args:
            ttl: Time-to-live for entries in seconds, 0 for no expiry.
        """
        self._ttl = ttl
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            path, stored_at = entry
            if self._ttl and time.time() - stored_at >= self._ttl:
                del self._entries[key]
                return None
            return path

    def set(self, key: str, path: str) -> None:
        with self._lock:
            self._entries[key] = (path, time.time())

    def clear(self) -> int:
        """Remove all entries and return how many there were."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        with self._lock:
            total = len(self._entries)
        return {
            "backend": "memory",
            "total_entries": total,
            "ttl": self._ttl,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
