# src/cache/memory_store.py — v1
"""In-process cache store (default CACHE_BACKEND=memory).

Entries live for the lifetime of the store instance. Expired entries are
dropped on read or by ``purge_expired``; no per-entry timers are scheduled.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from specscout.cache.base_cache_store import BaseCacheStore
from specscout.cache.models import CacheEntry
from specscout.core.models import ClassificationResult

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store with lazy TTL expiry."""

    def __init__(self, ttl_s: float, clock: Callable[[], float] | None = None) -> None:
        super().__init__(ttl_s, clock)
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> ClassificationResult | None:
        """Retrieve a live result by fingerprint."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock(), self._ttl_s):
                # Only evict the entry we inspected; a newer put may follow.
                del self._entries[key]
                logger.debug("Cache entry %s expired", key[:12])
                return None
            return entry.result

    async def put(self, key: str, result: ClassificationResult) -> None:
        """Store a result (last write for a key wins)."""
        entry = CacheEntry(fingerprint=key, result=result, inserted_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        with self._lock:
            self._entries.pop(key, None)

    async def purge_expired(self) -> int:
        """Evict all expired entries."""
        now = self._clock()
        with self._lock:
            expired = [
                k for k, e in self._entries.items() if e.is_expired(now, self._ttl_s)
            ]
            for k in expired:
                del self._entries[k]
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    async def size(self) -> int:
        with self._lock:
            return len(self._entries)
