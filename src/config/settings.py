# src/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings: model provider,
cache backend, batch throttling and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === MODEL PROVIDER ===
    llm_provider: str = "google"
    google_api_key: str = ""
    google_model: str = "gemini-2.0-flash"

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379"
    cache_ttl_seconds: int = 3600
    cache_connect_timeout_s: float = 5.0

    # === Batch execution ===
    batch_size: int = 5
    batch_delay_ms: int = 1000

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("batch_size must be >= 1")
        return v

    @field_validator("batch_delay_ms")
    @classmethod
    def validate_batch_delay(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("batch_delay_ms must be >= 0")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_enabled and self.cache_backend == "redis" and not self.redis_url:
            errors.append("REDIS_URL must be set when CACHE_BACKEND=redis")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def batch_delay_s(self) -> float:
        """Inter-window cooldown in seconds."""
        return self.batch_delay_ms / 1000.0


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
