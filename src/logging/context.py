# src/logging/context.py
"""Contextual logging support: attach request_id, processing type and batch
window to log records emitted while a request is in flight.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables are task-local, so concurrent requests in one batch
# window keep their own values.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_processing_type: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "processing_type", default=None
)
_batch_index: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "batch_index", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    request_id: str | None = None
    processing_type: str | None = None
    batch_index: int | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        processing_type=_processing_type.get(),
        batch_index=_batch_index.get(),
    )


RequestTokens = tuple[contextvars.Token, contextvars.Token]


def set_request_context(request_id: str, processing_type: str | None = None) -> RequestTokens:
    """Set request-level context; pass the result to reset_request_context()."""
    return _request_id.set(request_id), _processing_type.set(processing_type)


def reset_request_context(tokens: RequestTokens) -> None:
    """Restore the request context that was active before set_request_context()."""
    request_token, type_token = tokens
    _processing_type.reset(type_token)
    _request_id.reset(request_token)


def set_batch_context(batch_index: int | None) -> None:
    """Set the batch window currently executing."""
    _batch_index.set(batch_index)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _processing_type.set(None)
    _batch_index.set(None)
