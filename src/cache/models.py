# src/cache/models.py
"""Cache domain models: CacheResult, CacheStatus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, Field

UNAVAILABLE = "cache backend unavailable"


@dataclass(frozen=True)
class CacheResult:
    """Outcome of a single cache operation.

    Backends never raise to their callers; a failed operation is reported
    with ok=False and an error message. A successful ``get`` on a missing
    key is ok=True with value=None.
    """

    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> CacheResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> CacheResult:
        return cls(ok=False, error=error)

    @property
    def hit(self) -> bool:
        """True when the operation succeeded and produced a value."""
        return self.ok and self.value is not None

    def value_or(self, default: Any = None) -> Any:
        """Return the value on success, ``default`` otherwise."""
        return self.value if self.hit else default


class CacheStatus(BaseModel):
    """Health snapshot of a cache backend."""

    connected: bool
    status: Literal["connected", "disconnected", "error"]
    backend: str
    info: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None
