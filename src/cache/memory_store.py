# src/cache/memory_store.py
"""In-process cache store (CACHE_BACKEND=memory).

Keeps values in a dict with a monotonic expiry per key. Suitable for
single-process deployments and tests; nothing survives a restart.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from contentengine.cache.base_cache_store import DEFAULT_TTL_SECONDS, BaseCacheStore
from contentengine.cache.models import UNAVAILABLE, CacheResult, CacheStatus

logger = logging.getLogger(__name__)


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store with TTL."""

    def __init__(
        self,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(default_ttl=default_ttl)
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._connected = False

    @property
    def backend_name(self) -> str:
        return "memory"

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> bool:
        self._connected = True
        return True

    async def close(self) -> None:
        self._connected = False

    async def get(self, key: str) -> CacheResult:
        if not self._connected:
            return CacheResult.failure(UNAVAILABLE)
        entry = self._live_entry(key)
        return CacheResult.success(entry[0] if entry else None)

    async def set(self, key: str, value: str, ttl: int | None = None) -> CacheResult:
        if not self._connected:
            return CacheResult.failure(UNAVAILABLE)
        if not isinstance(value, str):
            logger.warning("Cache set failed for key %s: value is not a string", key)
            return CacheResult.failure("value must be a string")
        expiry = ttl if ttl is not None else self.default_ttl
        self._entries[key] = (value, self._clock() + expiry)
        return CacheResult.success(True)

    async def delete(self, key: str) -> CacheResult:
        if not self._connected:
            return CacheResult.failure(UNAVAILABLE)
        removed = self._live_entry(key) is not None
        self._entries.pop(key, None)
        return CacheResult.success(removed)

    async def exists(self, key: str) -> CacheResult:
        if not self._connected:
            return CacheResult.failure(UNAVAILABLE)
        return CacheResult.success(self._live_entry(key) is not None)

    async def expire(self, key: str, ttl: int) -> CacheResult:
        if not self._connected:
            return CacheResult.failure(UNAVAILABLE)
        entry = self._live_entry(key)
        if entry is None:
            return CacheResult.success(False)
        self._entries[key] = (entry[0], self._clock() + ttl)
        return CacheResult.success(True)

    async def clear(self) -> CacheResult:
        if not self._connected:
            return CacheResult.failure(UNAVAILABLE)
        self._entries.clear()
        return CacheResult.success(True)

    async def status(self) -> CacheStatus:
        if not self._connected:
            return CacheStatus(connected=False, status="disconnected", backend="memory")
        self._purge_expired()
        return CacheStatus(
            connected=True,
            status="connected",
            backend="memory",
            info={"keys": len(self._entries)},
        )

    def _live_entry(self, key: str) -> tuple[str, float] | None:
        """Return the entry for key, dropping it if expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            del self._entries[key]
            return None
        return entry

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, (_, exp) in self._entries.items() if exp <= now]:
            del self._entries[key]
