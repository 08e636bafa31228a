# src/cache/cache_factory.py
"""Factory for cache store instantiation."""

from __future__ import annotations

from contentengine.cache.base_cache_store import BaseCacheStore
from contentengine.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend (not yet connected).

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    if settings is None:
        from contentengine.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    backend = settings.cache_backend

    if backend == "memory":
        from contentengine.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore(default_ttl=settings.cache_ttl_seconds)

    if backend == "redis":
        from contentengine.cache.redis_store import RedisCacheStore
        if not settings.redis_url:
            raise ValueError("REDIS_URL must be set when CACHE_BACKEND=redis")
        return RedisCacheStore(
            redis_url=settings.redis_url,
            default_ttl=settings.cache_ttl_seconds,
            connect_timeout_s=settings.cache_connect_timeout_s,
        )

    raise ValueError(f"Unsupported cache backend: {backend!r}")
