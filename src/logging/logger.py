# src/logging/logger.py
"""Logger factory with JSON and text formatters.

Every record carries the in-flight request context (request id, processing
type, batch window); structured fields are passed as ``extra={"data": ...}``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from contentengine.logging.context import get_context

ROOT_LOGGER_NAME = "contentengine"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, tagged with the emitting service."""

    def __init__(self, service: str = ROOT_LOGGER_NAME) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            entry["context"] = context

        data = getattr(record, "data", None)
        if data:
            entry["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line console format for development."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = (
            f"{datetime.fromtimestamp(record.created, timezone.utc):%Y-%m-%d %H:%M:%S} "
            f"[{record.levelname:8s}] {record.name}"
        )
        if ctx.request_id:
            line += f" <{ctx.request_id}>"
        if ctx.processing_type:
            line += f" [{ctx.processing_type}]"
        if ctx.batch_index is not None:
            line += f" (window {ctx.batch_index})"
        line += f": {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the package root."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 30,
    stream: Any = None,
) -> None:
    """Configure the package root logger. Safe to call more than once.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text"; unknown values fall back to text.
        log_file: Optional rotating log file in addition to the console.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
        stream: Console stream. Defaults to stderr so CLI output on stdout
            stays machine-readable.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if log_file:
        from contentengine.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation=rotation, retention=retention))

    formatter = _FORMATTERS.get(log_format, TextFormatter)()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
