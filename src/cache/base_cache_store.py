# src/cache/base_cache_store.py
"""Abstract cache store interface.

Every operation returns a CacheResult instead of raising: the cache is a
performance optimisation, and callers decide how to degrade.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from contentengine.cache.models import CacheResult, CacheStatus

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


class BaseCacheStore(ABC):
    """Unified interface for key/value cache backends with TTL."""

    def __init__(self, default_ttl: int = DEFAULT_TTL_SECONDS) -> None:
        self.default_ttl = default_ttl

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (redis, memory)."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether operations will reach the backend."""

    @abstractmethod
    async def connect(self) -> bool:
        """Establish the backend connection. Returns False on failure."""

    @abstractmethod
    async def close(self) -> None:
        """Release the backend connection."""

    @abstractmethod
    async def get(self, key: str) -> CacheResult:
        """Retrieve a raw string value. Missing key is success with None."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int | None = None) -> CacheResult:
        """Store a value with expiration (``default_ttl`` when ttl is None)."""

    @abstractmethod
    async def delete(self, key: str) -> CacheResult:
        """Remove a key. Value is True when a key was removed."""

    @abstractmethod
    async def exists(self, key: str) -> CacheResult:
        """Value is True when the key is present."""

    @abstractmethod
    async def expire(self, key: str, ttl: int) -> CacheResult:
        """Reset expiration on an existing key. Value is True if applied."""

    @abstractmethod
    async def clear(self) -> CacheResult:
        """Remove every key held by this backend."""

    @abstractmethod
    async def status(self) -> CacheStatus:
        """Report connection state and backend info."""

    async def get_json(self, key: str) -> CacheResult:
        """Retrieve and deserialize a JSON value."""
        result = await self.get(key)
        if not result.hit:
            return result
        try:
            return CacheResult.success(json.loads(result.value))
        except (TypeError, ValueError) as e:
            logger.warning("Cache get_json failed for key %s: %s", key, e)
            return CacheResult.failure(f"invalid JSON: {e}")

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> CacheResult:
        """Serialize a value to JSON and store it."""
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.warning("Cache set_json failed for key %s: %s", key, e)
            return CacheResult.failure(f"unserializable value: {e}")
        return await self.set(key, payload, ttl)
