# src/llm/models.py
"""Model capability types: GenerationConfig, LLMResponse."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class GenerationConfig(BaseModel):
    """Optional sampling parameters forwarded to the provider."""

    temperature: float | None = None
    max_output_tokens: int | None = None

    def to_provider_dict(self) -> dict[str, Any]:
        """Return only the parameters that were set."""
        return self.model_dump(exclude_none=True)


class LLMResponse(BaseModel):
    """Normalized response from any model provider."""

    text: str
    model: str
    provider: str
    latency_ms: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    raw_response: Any = None
