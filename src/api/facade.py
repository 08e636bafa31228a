# src/api/facade.py
"""Public API facade: the engine composition root.

Usage:
    from contentengine.api.facade import ContentEngine

    async with ContentEngine.from_settings() as engine:
        result = await engine.process({"type": "summarize", "content": text})

The cache handle and model client are injected, so either can be replaced
by a test double.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

from contentengine.api.models import BatchRequest, BatchResponse, ServiceStatus
from contentengine.cache.base_cache_store import BaseCacheStore
from contentengine.config.settings import Settings
from contentengine.llm.base_client import BaseLLMClient
from contentengine.processing.batch import BatchExecutor
from contentengine.processing.dispatcher import ProcessingDispatcher
from contentengine.processing.errors import (
    BatchProcessingFailedError,
    InvalidRequestError,
    UnsupportedTypeError,
)
from contentengine.processing.models import ProcessingResult

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (InvalidRequestError, UnsupportedTypeError)


class ContentEngine:
    """Dispatcher plus batch executor wired to a cache and a model client.

    Args:
        llm_client: Model capability.
        cache_store: Cache backend, or None to run without caching.
        settings: Batch size, cooldown and TTL. Defaults from environment.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        cache_store: BaseCacheStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.llm_client = llm_client
        self.cache_store = cache_store
        self.dispatcher = ProcessingDispatcher(
            llm_client=llm_client,
            cache_store=cache_store,
            cache_ttl_seconds=self.settings.cache_ttl_seconds,
        )
        self.executor = BatchExecutor(
            self.dispatcher,
            batch_size=self.settings.batch_size,
            delay_ms=self.settings.batch_delay_ms,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ContentEngine:
        """Build the engine with the configured provider and cache backend."""
        from contentengine.cache.cache_factory import create_cache_store
        from contentengine.llm.client_factory import create_llm_client_from_settings

        settings = settings or Settings()
        cache_store = create_cache_store(settings) if settings.cache_enabled else None
        return cls(
            llm_client=create_llm_client_from_settings(settings),
            cache_store=cache_store,
            settings=settings,
        )

    async def start(self) -> None:
        """Connect the cache. A failed connection leaves caching disabled."""
        if self.cache_store is None:
            logger.info("Cache disabled")
            return
        if not await self.cache_store.connect():
            logger.warning(
                "Cache backend %s unreachable, continuing without cache",
                self.cache_store.backend_name,
            )

    async def close(self) -> None:
        if self.cache_store is not None:
            await self.cache_store.close()

    async def __aenter__(self) -> ContentEngine:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def process(self, payload: Mapping[str, Any]) -> ProcessingResult:
        """Process one request payload ``{type, content, options}``."""
        return await self.dispatcher.process(payload)

    async def batch(self, payload: Mapping[str, Any]) -> BatchResponse:
        """Process a ``{requests: [...]}`` payload."""
        try:
            body = BatchRequest.model_validate(dict(payload))
        except (TypeError, ValueError, ValidationError) as e:
            raise InvalidRequestError("Valid requests array is required") from e
        results = await self.executor.run(body.requests)
        return BatchResponse(results=results, count=len(results))

    async def status(self) -> ServiceStatus:
        """Report provider, model and cache health."""
        now = datetime.now(timezone.utc)
        try:
            cache_status = (
                await self.cache_store.status() if self.cache_store is not None else None
            )
        except Exception as e:
            logger.error("Status check failed: %s", e)
            return ServiceStatus(
                status="unhealthy",
                provider=self.llm_client.provider_name,
                model=self.llm_client.model_name,
                last_checked=now,
                error=str(e),
            )
        degraded = cache_status is not None and not cache_status.connected
        return ServiceStatus(
            status="degraded" if degraded else "healthy",
            provider=self.llm_client.provider_name,
            model=self.llm_client.model_name,
            last_checked=now,
            cache=cache_status,
        )

    async def clear_cache(self) -> bool:
        """Flush every cached result. False if the cache is unavailable."""
        if self.cache_store is None:
            return False
        result = await self.cache_store.clear()
        if not result.ok:
            logger.warning("Cache clear failed: %s", result.error)
        return result.ok


def http_status_for(exc: BaseException) -> int:
    """HTTP status an API layer should answer with for an engine error."""
    return 400 if isinstance(exc, _CLIENT_ERRORS) else 500


def error_body(exc: BaseException) -> dict[str, str]:
    """JSON error body matching the status code of http_status_for()."""
    if isinstance(exc, _CLIENT_ERRORS):
        return {"message": str(exc), "error": type(exc).__name__}
    if isinstance(exc, BatchProcessingFailedError):
        return {"message": "AI batch processing failed", "error": str(exc)}
    return {"message": "AI processing failed", "error": str(exc)}
