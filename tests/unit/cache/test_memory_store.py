# tests/unit/cache/test_memory_store.py
"""Tests for cache/memory_store.py: TTL, contract, disconnected behaviour."""

from __future__ import annotations

import pytest

from contentengine.cache.memory_store import MemoryCacheStore
from contentengine.cache.models import UNAVAILABLE


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_set_and_get(self):
        store = MemoryCacheStore()
        await store.connect()
        assert (await store.set("k", "v")).value is True
        assert (await store.get("k")).value == "v"

    @pytest.mark.asyncio
    async def test_get_missing(self):
        store = MemoryCacheStore()
        await store.connect()
        result = await store.get("missing")
        assert result.ok is True
        assert result.value is None

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        store = MemoryCacheStore(default_ttl=60, clock=clock)
        await store.connect()
        await store.set("k", "v")
        clock.now += 59
        assert (await store.get("k")).value == "v"
        clock.now += 1
        assert (await store.get("k")).value is None

    @pytest.mark.asyncio
    async def test_explicit_ttl_overrides_default(self):
        clock = FakeClock()
        store = MemoryCacheStore(default_ttl=60, clock=clock)
        await store.connect()
        await store.set("k", "v", ttl=5)
        clock.now += 5
        assert (await store.exists("k")).value is False

    @pytest.mark.asyncio
    async def test_expire_extends_lifetime(self):
        clock = FakeClock()
        store = MemoryCacheStore(default_ttl=10, clock=clock)
        await store.connect()
        await store.set("k", "v")
        assert (await store.expire("k", 100)).value is True
        clock.now += 50
        assert (await store.get("k")).value == "v"

    @pytest.mark.asyncio
    async def test_expire_missing_key(self):
        store = MemoryCacheStore()
        await store.connect()
        assert (await store.expire("nope", 10)).value is False

    @pytest.mark.asyncio
    async def test_delete_and_exists(self):
        store = MemoryCacheStore()
        await store.connect()
        await store.set("k", "v")
        assert (await store.exists("k")).value is True
        assert (await store.delete("k")).value is True
        assert (await store.delete("k")).value is False
        assert (await store.exists("k")).value is False

    @pytest.mark.asyncio
    async def test_clear(self):
        store = MemoryCacheStore()
        await store.connect()
        await store.set("a", "1")
        await store.set("b", "2")
        assert (await store.clear()).ok
        assert (await store.status()).info["keys"] == 0

    @pytest.mark.asyncio
    async def test_rejects_non_string_value(self):
        store = MemoryCacheStore()
        await store.connect()
        result = await store.set("k", {"a": 1})  # type: ignore[arg-type]
        assert result.ok is False

    @pytest.mark.asyncio
    async def test_json_helpers(self):
        store = MemoryCacheStore()
        await store.connect()
        assert (await store.set_json("k", {"a": [1, 2]})).ok
        assert (await store.get_json("k")).value == {"a": [1, 2]}

    @pytest.mark.asyncio
    async def test_get_json_invalid_payload(self):
        store = MemoryCacheStore()
        await store.connect()
        await store.set("k", "{not json")
        result = await store.get_json("k")
        assert result.ok is False
        assert "invalid JSON" in result.error

    @pytest.mark.asyncio
    async def test_set_json_unserializable(self):
        store = MemoryCacheStore()
        await store.connect()
        result = await store.set_json("k", {"s": {1, 2}})
        assert result.ok is False
        assert (await store.exists("k")).value is False

    @pytest.mark.asyncio
    async def test_disconnected_operations_fail(self):
        store = MemoryCacheStore()
        for result in (
            await store.get("k"),
            await store.set("k", "v"),
            await store.delete("k"),
            await store.exists("k"),
            await store.expire("k", 1),
            await store.clear(),
        ):
            assert result.ok is False
            assert result.error == UNAVAILABLE

    @pytest.mark.asyncio
    async def test_status(self):
        store = MemoryCacheStore()
        assert (await store.status()).status == "disconnected"
        await store.connect()
        status = await store.status()
        assert status.connected is True
        assert status.backend == "memory"
