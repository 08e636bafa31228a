# src/processing/json_utils.py
"""Parsing helpers for model output that must be JSON.

The model wraps structured output in markdown fences, so the leading
```json marker and trailing fence are removed before parsing.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```json\n")
_TRAILING_FENCE = re.compile(r"```$")


def strip_code_fence(text: str) -> str:
    """Remove a leading '```json\\n' and a trailing '```', then trim."""
    cleaned = _LEADING_FENCE.sub("", text or "", count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_model_json(text: str, fallback: Any = None) -> Any:
    """Parse fenced model output, returning ``fallback`` if it is not JSON."""
    cleaned = strip_code_fence(text)
    try:
        return json.loads(cleaned)
    except ValueError as e:
        logger.warning("Model output is not valid JSON: %s", e)
        return fallback
