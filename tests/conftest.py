# tests/conftest.py
"""Shared test fixtures for all unit and integration tests.

Provides a mock model client, cache stores and sample requests.
No external dependencies: Redis and the model provider are never contacted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from contentengine.cache.memory_store import MemoryCacheStore
from contentengine.cache.redis_store import RedisCacheStore
from contentengine.config.settings import Settings
from contentengine.llm.models import LLMResponse
from contentengine.processing.dispatcher import ProcessingDispatcher

FIXED_NOW = datetime(2026, 2, 16, 12, 0, 0, tzinfo=timezone.utc)


def make_response(text: str) -> LLMResponse:
    """LLMResponse carrying the given text."""
    return LLMResponse(
        text=text,
        model="gemini-2.0-flash",
        provider="mock",
        latency_ms=5,
        input_tokens=10,
        output_tokens=20,
    )


# === FIXTURES: Mock model ===


@pytest.fixture
def mock_llm_client() -> AsyncMock:
    """Mock BaseLLMClient answering every prompt with a fixed text."""
    client = AsyncMock()
    client.generate = AsyncMock(return_value=make_response("Bonjour le monde !"))
    client.provider_name = "mock"
    client.model_name = "gemini-2.0-flash"
    return client


# === FIXTURES: Cache ===


@pytest_asyncio.fixture
async def memory_cache() -> MemoryCacheStore:
    """Connected in-memory cache."""
    store = MemoryCacheStore()
    await store.connect()
    return store


@pytest.fixture
def disconnected_redis() -> RedisCacheStore:
    """Redis store that never connected (backend unreachable)."""
    return RedisCacheStore(redis_url="redis://localhost:1")


# === FIXTURES: Processing ===


@pytest.fixture
def dispatcher(mock_llm_client: AsyncMock, memory_cache: MemoryCacheStore) -> ProcessingDispatcher:
    """Dispatcher over the mock model and a memory cache, fixed clock."""
    return ProcessingDispatcher(
        llm_client=mock_llm_client,
        cache_store=memory_cache,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any .env file, memory cache, no cooldown."""
    return Settings(
        _env_file=None,
        cache_backend="memory",
        google_api_key="test-key",
        batch_delay_ms=0,
    )


@pytest.fixture
def translate_request() -> dict:
    return {
        "type": "translate",
        "content": "Hello world!",
        "options": {"targetLanguage": "French"},
    }
