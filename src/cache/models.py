# src/cache/models.py — v2
"""Cache domain models: CacheEntry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from specscout.core.models import ClassificationResult


class CacheEntry(BaseModel):
    """Cached classification for one fingerprint.

    Entries are replaced, never updated in place.
    """

    model_config = ConfigDict(frozen=True)

    fingerprint: str
    result: ClassificationResult
    inserted_at: float  # epoch seconds

    def is_expired(self, now: float, ttl_s: float) -> bool:
        """True once ``ttl_s`` seconds have elapsed since insertion."""
        return now - self.inserted_at >= ttl_s
