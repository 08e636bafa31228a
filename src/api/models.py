# src/api/models.py
"""Service-level request/response shapes for the process, batch and status
operations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contentengine.cache.models import CacheStatus
from contentengine.processing.models import ProcessingResult


class BatchRequest(BaseModel):
    """Body of a batch call: a non-empty list of raw request payloads."""

    requests: list[dict[str, Any]] = Field(min_length=1)


class BatchResponse(BaseModel):
    """Ordered batch results."""

    results: list[ProcessingResult]
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"results": [r.to_dict() for r in self.results], "count": self.count}


class ServiceStatus(BaseModel):
    """Health report for the engine and its collaborators."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Literal["healthy", "degraded", "unhealthy"]
    provider: str
    model: str
    last_checked: datetime
    cache: CacheStatus | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
