# tests/unit/cache/test_unit_cache_factory.py
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

import pytest

from contentengine.cache.cache_factory import create_cache_store
from contentengine.cache.memory_store import MemoryCacheStore
from contentengine.cache.redis_store import RedisCacheStore
from contentengine.config.settings import Settings


class TestCreateCacheStore:
    def test_default_is_memory(self):
        assert isinstance(create_cache_store(), MemoryCacheStore)

    def test_memory_backend_uses_ttl(self):
        s = Settings(_env_file=None, cache_backend="memory", cache_ttl_seconds=120)
        store = create_cache_store(s)
        assert isinstance(store, MemoryCacheStore)
        assert store.default_ttl == 120

    def test_redis_backend(self):
        s = Settings(_env_file=None, cache_backend="redis", redis_url="redis://cache:6379/0")
        store = create_cache_store(s)
        assert isinstance(store, RedisCacheStore)
        assert store.is_connected is False

    def test_redis_without_url(self):
        s = Settings(_env_file=None, cache_enabled=False, cache_backend="redis", redis_url="")
        with pytest.raises(ValueError, match="REDIS_URL"):
            create_cache_store(s)
