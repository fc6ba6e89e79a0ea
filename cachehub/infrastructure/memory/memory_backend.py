"""
In-Memory Cache Backend

Process-local backend used for development, tests and single-instance
deployments. Entries expire lazily on read once their TTL elapses.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...domain.cache.repository_interfaces import CacheBackend
from ...domain.cache.value_objects import TTL

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: str
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryCacheBackend(CacheBackend):
    """Thread-safe dictionary store with per-entry expiration."""

    name = "memory"

    def __init__(self, clock=time.monotonic):
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now):
                del self._entries[key]
                logger.debug(f"Expired in-memory cache entry: {key}")
                return None
            return entry.value

    async def set(self, key: str, value: str, ttl: Optional[TTL] = None) -> None:
        expires_at = self._clock() + ttl.seconds if ttl else None
        with self._lock:
            self._entries[key] = _Entry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def ping(self) -> Dict[str, Any]:
        with self._lock:
            entry_count = len(self._entries)
        return {"status": "healthy", "backend": self.name, "entries": entry_count}

    async def close(self) -> None:
        with self._lock:
            self._entries.clear()
