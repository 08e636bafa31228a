# src/cache/fingerprint.py
"""Content-addressed cache keys for processing requests.

A key is ``ai:<type>:<sha256 hex>`` over the canonical serialization of
(type, content, options). Pure: no cache or model access.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from contentengine.processing.models import ProcessingRequest

KEY_PREFIX = "ai"


def canonicalize(type_: str, content: str, options: Mapping[str, Any] | None) -> str:
    """Stable serialization: ordered [type, content, options], keys sorted.

    Raises:
        TypeError: Options hold values JSON cannot encode, or mixed-type keys.
        ValueError: Options contain a circular reference.
    """
    return json.dumps(
        [type_, content, dict(options or {})],
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def compute_fingerprint(request: ProcessingRequest) -> str:
    """Derive the cache key for a request.

    Args:
        request: Validated processing request.

    Returns:
        Key namespaced by processing type, e.g. ``ai:summarize:3f2a...``.
    """
    canonical = canonicalize(request.type, request.content, request.options)
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}:{request.type}:{digest}"
