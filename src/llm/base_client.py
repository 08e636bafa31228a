# src/llm/base_client.py
"""Abstract model client interface.

The processing core depends only on this narrow contract: prompt in,
text out, may fail.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from contentengine.llm.models import GenerationConfig, LLMResponse


class LLMConfigurationError(RuntimeError):
    """Raised when a provider cannot be initialised (e.g. missing API key)."""


class BaseLLMClient(ABC):
    """Unified interface for generative model providers."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        generation_config: GenerationConfig | None = None,
    ) -> LLMResponse:
        """Single-turn text completion."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, ...)."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier used for completions."""
