# src/cache/redis_store.py
"""Redis-based cache store (CACHE_BACKEND=redis).

Uses the asyncio client from the 'redis' package. The store connects once
at startup; if that fails it stays disconnected and every operation reports
failure without touching the network. Reconnection after a successful
start is left to the redis client itself.
"""

from __future__ import annotations

import logging
from typing import Any

import redis.asyncio as redis

from contentengine.cache.base_cache_store import DEFAULT_TTL_SECONDS, BaseCacheStore
from contentengine.cache.models import UNAVAILABLE, CacheResult, CacheStatus

logger = logging.getLogger(__name__)


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store."""

    def __init__(
        self,
        redis_url: str,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        connect_timeout_s: float = 5.0,
    ) -> None:
        super().__init__(default_ttl=default_ttl)
        self._redis_url = redis_url
        self._connect_timeout_s = connect_timeout_s
        self._client: redis.Redis | None = None
        self._connected = False

    @property
    def backend_name(self) -> str:
        return "redis"

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._connected

    async def connect(self) -> bool:
        """Create the client and verify it with a PING."""
        client: redis.Redis | None = None
        try:
            client = redis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self._connect_timeout_s,
                socket_timeout=self._connect_timeout_s,
                health_check_interval=30,
            )
            await client.ping()
        except Exception as e:
            logger.error("Failed to connect to Redis cache: %s", e)
            if client is not None:
                await _discard(client)
            self._client = None
            self._connected = False
            return False

        self._client = client
        self._connected = True
        logger.info("Redis cache connected")
        return True

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            try:
                await self._client.aclose()
            except Exception as e:
                logger.warning("Error closing Redis connection: %s", e)
            self._client = None
            self._connected = False
            logger.info("Redis cache connection closed")

    async def get(self, key: str) -> CacheResult:
        return await self._run("get", key, lambda c: c.get(key))

    async def set(self, key: str, value: str, ttl: int | None = None) -> CacheResult:
        expiry = ttl if ttl is not None else self.default_ttl
        result = await self._run("set", key, lambda c: c.set(key, value, ex=expiry))
        if result.ok:
            return CacheResult.success(bool(result.value))
        return result

    async def delete(self, key: str) -> CacheResult:
        result = await self._run("delete", key, lambda c: c.delete(key))
        return CacheResult.success(result.value > 0) if result.ok else result

    async def exists(self, key: str) -> CacheResult:
        result = await self._run("exists", key, lambda c: c.exists(key))
        return CacheResult.success(result.value == 1) if result.ok else result

    async def expire(self, key: str, ttl: int) -> CacheResult:
        result = await self._run("expire", key, lambda c: c.expire(key, ttl))
        return CacheResult.success(bool(result.value)) if result.ok else result

    async def clear(self) -> CacheResult:
        result = await self._run("clear", "*", lambda c: c.flushdb())
        return CacheResult.success(True) if result.ok else result

    async def status(self) -> CacheStatus:
        if not self.is_connected:
            return CacheStatus(connected=False, status="disconnected", backend="redis")
        try:
            memory = await self._client.info("memory")
            stats = await self._client.info("stats")
        except Exception as e:
            logger.warning("Cache status failed: %s", e)
            return CacheStatus(
                connected=False, status="error", backend="redis", error=str(e)
            )
        return CacheStatus(
            connected=True,
            status="connected",
            backend="redis",
            info={"memory": memory, "stats": stats},
        )

    async def _run(self, operation: str, key: str, call: Any) -> CacheResult:
        """Execute one client call, converting any error into a failure."""
        if not self.is_connected:
            return CacheResult.failure(UNAVAILABLE)
        try:
            return CacheResult.success(await call(self._client))
        except Exception as e:
            logger.warning("Cache %s failed for key %s: %s", operation, key, e)
            return CacheResult.failure(str(e))


async def _discard(client: redis.Redis) -> None:
    """Release the pool of a client that never became usable."""
    try:
        await client.aclose()
    except Exception as e:
        logger.warning("Error closing unusable Redis client: %s", e)
