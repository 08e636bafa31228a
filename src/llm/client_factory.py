# src/llm/client_factory.py
"""Factory: build the model client named by LLM_PROVIDER.

Adapters are registered by dotted class path and imported on first use,
so a provider's SDK is only loaded when that provider is selected.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass

from contentengine.config.settings import Settings
from contentengine.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSpec:
    """Where an adapter lives and which settings feed it."""

    class_path: str
    api_key_setting: str | None = None
    model_setting: str | None = None


_PROVIDER_REGISTRY: dict[str, ProviderSpec] = {
    "google": ProviderSpec(
        class_path="contentengine.llm.adapters.google_adapter.GoogleAdapter",
        api_key_setting="google_api_key",
        model_setting="google_model",
    ),
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def available_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the adapter registered for ``provider``.

    Args:
        provider: Registered provider identifier.
        model: Model name passed to the adapter (e.g. gemini-2.0-flash).
        settings: When given, supplies the provider's API key unless
            ``api_key`` is passed explicitly.
        **kwargs: Extra adapter arguments.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    entry = _PROVIDER_REGISTRY.get(provider)
    if entry is None:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(available_providers())}"
        )

    init_kwargs = dict(kwargs, model=model)
    if settings is not None and entry.api_key_setting:
        init_kwargs.setdefault("api_key", getattr(settings, entry.api_key_setting))

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return _import_class(entry.class_path)(**init_kwargs)


def create_llm_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Build the client selected by LLM_PROVIDER with its configured model."""
    entry = _PROVIDER_REGISTRY.get(settings.llm_provider)
    model = getattr(settings, entry.model_setting) if entry and entry.model_setting else ""
    return create_llm_client(settings.llm_provider, model, settings)


def register_provider(
    name: str,
    class_path: str,
    api_key_setting: str | None = None,
    model_setting: str | None = None,
) -> None:
    """Register a custom adapter implementing BaseLLMClient."""
    _PROVIDER_REGISTRY[name] = ProviderSpec(class_path, api_key_setting, model_setting)
    logger.info("Registered LLM provider: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)
