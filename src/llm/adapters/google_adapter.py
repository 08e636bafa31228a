# src/llm/adapters/google_adapter.py
"""Google Gemini adapter implementing BaseLLMClient.

Uses the google-generativeai SDK. The SDK is configured lazily on the
first call and the same path is taken by every processing type.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from contentengine.llm.base_client import BaseLLMClient, LLMConfigurationError
from contentengine.llm.models import GenerationConfig, LLMResponse

logger = logging.getLogger(__name__)


class GoogleAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(self, model: str = "gemini-2.0-flash", api_key: str = "", **kwargs: Any):
        self._model_name = model
        self._api_key = api_key
        self._model: Any = None

    def _ensure_model(self) -> Any:
        """Configure the SDK and build the model handle on first use."""
        if self._model is None:
            if not self._api_key:
                raise LLMConfigurationError("GOOGLE_API_KEY is required for the google provider")
            import google.generativeai as genai

            genai.configure(api_key=self._api_key)
            self._model = genai.GenerativeModel(self._model_name)
            logger.info("Google GenAI client initialized (model=%s)", self._model_name)
        return self._model

    async def generate(
        self,
        prompt: str,
        generation_config: GenerationConfig | None = None,
    ) -> LLMResponse:
        model = self._ensure_model()

        contents = [{"role": "user", "parts": [{"text": prompt}]}]
        kwargs: dict[str, Any] = {}
        if generation_config is not None:
            kwargs["generation_config"] = generation_config.to_provider_dict()

        t0 = time.monotonic()
        resp = await model.generate_content_async(contents, **kwargs)
        latency = int((time.monotonic() - t0) * 1000)

        usage = getattr(resp, "usage_metadata", None)
        return LLMResponse(
            text=resp.text or "",
            model=self._model_name,
            provider="google",
            latency_ms=latency,
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def model_name(self) -> str:
        return self._model_name
