# src/cache/base_cache_store.py — v2
"""Abstract cache store interface with time-bounded entries."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable

from specscout.core.models import ClassificationResult


class BaseCacheStore(ABC):
    """Unified interface for classification cache backends.

    Entries expire ``ttl_s`` seconds after insertion. Expiry is checked
    lazily on ``get`` and in bulk by ``purge_expired``.
    """

    def __init__(self, ttl_s: float, clock: Callable[[], float] | None = None) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be > 0")
        self._ttl_s = ttl_s
        self._clock = clock or time.time

    @property
    def ttl_s(self) -> float:
        return self._ttl_s

    @abstractmethod
    async def get(self, key: str) -> ClassificationResult | None:
        """Retrieve a live result by fingerprint (None if absent or expired)."""

    @abstractmethod
    async def put(self, key: str, result: ClassificationResult) -> None:
        """Store a result, replacing any previous entry for the key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a cache entry."""

    @abstractmethod
    async def purge_expired(self) -> int:
        """Evict all expired entries. Returns the number removed."""

    @abstractmethod
    async def size(self) -> int:
        """Number of stored entries (expired ones may still be counted)."""
