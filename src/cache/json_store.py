# src/cache/json_store.py — v2
"""JSON file-based cache store (CACHE_BACKEND=json).

Stores one JSON file per fingerprint under CACHE_ROOT so cached
classifications survive process restarts. Files are written to a temp
file and renamed into place, so readers never see a partial entry.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from specscout.cache.base_cache_store import BaseCacheStore
from specscout.cache.models import CacheEntry
from specscout.core.models import ClassificationResult

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(
        self,
        cache_root: Path | str,
        ttl_s: float,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__(ttl_s, clock)
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def get(self, key: str) -> ClassificationResult | None:
        """Retrieve a live result by fingerprint."""
        entry = self._read_entry(self._entry_path(key))
        if entry is None:
            return None
        if entry.is_expired(self._clock(), self._ttl_s):
            await self.delete(key)
            return None
        return entry.result

    async def put(self, key: str, result: ClassificationResult) -> None:
        """Store a result atomically (temp file + rename)."""
        entry = CacheEntry(fingerprint=key, result=result, inserted_at=self._clock())
        path = self._entry_path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(entry.model_dump_json(indent=2))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._entry_path(key).unlink(missing_ok=True)

    async def purge_expired(self) -> int:
        """Evict expired and unreadable entries."""
        now = self._clock()
        removed = 0
        for path in self._root.glob("*.json"):
            entry = self._read_entry(path)
            if entry is None or entry.is_expired(now, self._ttl_s):
                path.unlink(missing_ok=True)
                removed += 1
        return removed

    async def size(self) -> int:
        return sum(1 for _ in self._root.glob("*.json"))

    def _read_entry(self, path: Path) -> CacheEntry | None:
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return CacheEntry.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Failed to read cache entry %s: %s", path.name, e)
            return None

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_key}.json"
