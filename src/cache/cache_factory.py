# src/cache/cache_factory.py — v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from typing import Callable

from specscout.cache.base_cache_store import BaseCacheStore
from specscout.config.settings import Settings


def create_cache_store(
    settings: Settings | None = None,
    clock: Callable[[], float] | None = None,
) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to an in-memory store
            with a 24h TTL.
        clock: Optional time source (epoch seconds) for TTL checks.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend
    ttl_s = 86_400 if settings is None else settings.llm_cache_ttl

    if backend == "memory":
        from specscout.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore(ttl_s=ttl_s, clock=clock)

    if backend == "json":
        from specscout.cache.json_store import JsonCacheStore
        cache_root = "~/.specscout/cache" if settings is None else str(settings.cache_root)
        return JsonCacheStore(cache_root=cache_root, ttl_s=ttl_s, clock=clock)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
