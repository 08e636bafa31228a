# src/processing/dispatcher.py
"""Processing dispatcher: cache-aside execution of a single request.

Flow per request:
  1. Validate the request and its options (no I/O on failure)
  2. Fingerprint it
  3. Cache lookup; a hit returns without calling the model
  4. On miss, run the type-specific transform against the model
  5. Wrap the payload in a ProcessingResult and write it back to the cache
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping

from pydantic import ValidationError

from contentengine.cache.base_cache_store import DEFAULT_TTL_SECONDS
from contentengine.cache.fingerprint import compute_fingerprint
from contentengine.llm.models import GenerationConfig
from contentengine.logging.context import reset_request_context, set_request_context
from contentengine.processing import prompts
from contentengine.processing.errors import (
    ContentProcessingError,
    ProcessingFailedError,
    UnsupportedTypeError,
)
from contentengine.processing.json_utils import parse_model_json
from contentengine.processing.models import (
    GeneratedContentPayload,
    GenerateOptions,
    KeywordsPayload,
    ProcessingRequest,
    ProcessingResult,
    ProcessingType,
    SummarizeOptions,
    SummaryPayload,
    TranslateOptions,
    TranslationPayload,
    parse_options,
    resolve_type,
)

if TYPE_CHECKING:
    from contentengine.cache.base_cache_store import BaseCacheStore
    from contentengine.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

INVALID_RESULT = {"error": "Invalid result format"}

Transform = Callable[[str, Any], Awaitable[Any]]


class ProcessingDispatcher:
    """Route requests to transforms behind a cache-aside layer.

    Args:
        llm_client: Model capability used on cache misses.
        cache_store: Cache backend. None disables caching entirely.
        cache_ttl_seconds: Expiry applied to populated entries.
        clock: Returns the timestamp stamped on results.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        cache_store: BaseCacheStore | None = None,
        cache_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._llm = llm_client
        self._cache = cache_store
        self._ttl = cache_ttl_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._transforms: dict[ProcessingType, Transform] = {
            ProcessingType.SUMMARIZE: self._summarize,
            ProcessingType.ANALYZE_SENTIMENT: self._analyze_sentiment,
            ProcessingType.EXTRACT_KEYWORDS: self._extract_keywords,
            ProcessingType.GENERATE_CONTENT: self._generate_content,
            ProcessingType.TRANSLATE: self._translate,
        }

    @property
    def supported_types(self) -> list[str]:
        return [t.value for t in self._transforms]

    async def process(self, request: ProcessingRequest | Mapping[str, Any]) -> ProcessingResult:
        """Process one request, serving it from the cache when possible.

        Raises:
            InvalidRequestError: Missing/malformed fields or options.
            UnsupportedTypeError: Unknown processing type.
            ProcessingFailedError: The model or transform failed.
        """
        req = ProcessingRequest.from_payload(request)
        processing_type = self._resolve_type(req.type)
        options = parse_options(processing_type, req.options)

        tokens = set_request_context(uuid.uuid4().hex[:12], processing_type.value)
        try:
            return await self._process_validated(req, processing_type, options)
        finally:
            reset_request_context(tokens)

    async def _process_validated(
        self,
        req: ProcessingRequest,
        processing_type: ProcessingType,
        options: Any,
    ) -> ProcessingResult:
        key = compute_fingerprint(req)
        start = time.monotonic()

        cached = await self._cache_lookup(key)
        if cached is not None:
            logger.info(
                "AI processing result served from cache",
                extra={"data": {
                    "processing_type": processing_type.value,
                    "content_length": len(req.content),
                    "cache_hit": True,
                }},
            )
            return cached

        transform = self._transforms[processing_type]
        try:
            payload = await transform(req.content, options)
        except ContentProcessingError:
            raise
        except Exception as e:
            logger.error(
                "AI processing failed: %s", e,
                extra={"data": {
                    "processing_type": processing_type.value,
                    "content_length": len(req.content),
                }},
            )
            raise ProcessingFailedError(processing_type.value, e) from e

        result = ProcessingResult(
            type=processing_type.value,
            result=payload,
            processing_timestamp=self._clock(),
        )
        await self._cache_populate(key, result)

        logger.info(
            "AI processing completed",
            extra={"data": {
                "processing_type": processing_type.value,
                "content_length": len(req.content),
                "processing_ms": int((time.monotonic() - start) * 1000),
                "cache_hit": False,
            }},
        )
        return result

    def _resolve_type(self, value: str) -> ProcessingType:
        processing_type = resolve_type(value)
        if processing_type not in self._transforms:
            raise UnsupportedTypeError(value)
        return processing_type

    # --- Cache-aside ---

    async def _cache_lookup(self, key: str) -> ProcessingResult | None:
        """Return the cached result for key, or None on miss or cache failure."""
        if self._cache is None:
            return None
        lookup = await self._cache.get(key)
        if not lookup.ok:
            logger.debug("Cache lookup unavailable for %s: %s", key, lookup.error)
            return None
        if lookup.value is None:
            return None
        try:
            return ProcessingResult.from_json(lookup.value)
        except ValidationError as e:
            logger.warning("Discarding unreadable cache entry %s: %s", key, e)
            return None

    async def _cache_populate(self, key: str, result: ProcessingResult) -> None:
        if self._cache is None:
            return
        stored = await self._cache.set(key, result.to_json(), self._ttl)
        if not stored.ok:
            logger.warning("Cache write failed for %s: %s", key, stored.error)

    # --- Transforms ---

    async def _complete(self, prompt: str, config: GenerationConfig | None = None) -> str:
        response = await self._llm.generate(prompt, config)
        logger.debug(
            "Model call: provider=%s model=%s latency=%dms tokens=%d/%d",
            response.provider, response.model, response.latency_ms,
            response.input_tokens, response.output_tokens,
        )
        return response.text

    async def _summarize(self, content: str, options: SummarizeOptions) -> dict[str, Any]:
        summary = await self._complete(prompts.summarize_prompt(content, options))
        ratio = len(content) / len(summary) if summary else 0.0
        return SummaryPayload(
            summary=summary,
            original_length=len(content),
            summary_length=len(summary),
            compression_ratio=ratio,
        ).to_dict()

    async def _analyze_sentiment(self, content: str, options: Any) -> Any:
        text = await self._complete(prompts.sentiment_prompt(content))
        return parse_model_json(text, fallback=dict(INVALID_RESULT))

    async def _extract_keywords(self, content: str, options: Any) -> dict[str, Any]:
        text = await self._complete(prompts.keywords_prompt(content))
        parsed = parse_model_json(text, fallback=[])
        if not isinstance(parsed, list):
            logger.warning("Keyword output is not a JSON array, returning no keywords")
            parsed = []
        return KeywordsPayload(keywords=parsed).to_dict()

    async def _generate_content(self, content: str, options: GenerateOptions) -> dict[str, Any]:
        config = GenerationConfig(
            temperature=options.temperature,
            max_output_tokens=options.max_tokens,
        )
        generated = await self._complete(prompts.generate_prompt(content, options), config)
        return GeneratedContentPayload(
            content=generated,
            word_count=len(generated.split()),
        ).to_dict()

    async def _translate(self, content: str, options: TranslateOptions) -> dict[str, Any]:
        translated = await self._complete(prompts.translate_prompt(content, options))
        return TranslationPayload(
            original_text=content,
            translated_text=translated,
            target_language=options.target_language,
        ).to_dict()
