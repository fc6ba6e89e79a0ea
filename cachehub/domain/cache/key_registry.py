"""
Key Registry

In-memory bookkeeping of the keys a cache service instance believes are
live in its backend. The backend stays authoritative for values; the
registry only exists to support prefix invalidation on backends that
expose single-key operations.
"""

import threading
from typing import Dict, Iterator, List


class KeyRegistry:
    """
    Thread-safe set of tracked cache keys.

    Safe to share between asyncio tasks and OS threads. The registry is an
    approximation: it under-counts keys written by other instances or
    expired server-side, and only learns about removals done through its
    owning service.
    """

    def __init__(self):
        # Marker value carries no meaning beyond presence
        self._keys: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def add(self, key: str) -> bool:
        """Track key. Returns True if it was not tracked before."""
        with self._lock:
            if key in self._keys:
                return False
            self._keys[key] = False
            return True

    def discard(self, key: str) -> bool:
        """Stop tracking key. Returns True if it was tracked."""
        with self._lock:
            return self._keys.pop(key, None) is not None

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._keys

    def snapshot(self) -> List[str]:
        """Point-in-time copy of tracked keys."""
        with self._lock:
            return list(self._keys)

    def matching(self, prefix: str) -> List[str]:
        """Snapshot of tracked keys starting with prefix (ordinal match)."""
        return [key for key in self.snapshot() if key.startswith(prefix)]

    def clear(self) -> int:
        """Forget every tracked key. Returns how many were dropped."""
        with self._lock:
            count = len(self._keys)
            self._keys.clear()
            return count

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
