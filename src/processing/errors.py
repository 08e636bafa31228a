# src/processing/errors.py
"""Error taxonomy for the processing pipeline.

Client errors (InvalidRequestError, UnsupportedTypeError) are raised before
any cache or model I/O. Cache failures never appear here: the cache layer
reports them as failed CacheResults.
"""

from __future__ import annotations


class ContentProcessingError(Exception):
    """Base class for all processing errors."""


class InvalidRequestError(ContentProcessingError):
    """Missing or malformed request fields."""


class UnsupportedTypeError(ContentProcessingError):
    """Processing type is not one of the supported operations."""

    def __init__(self, processing_type: object):
        self.processing_type = processing_type
        super().__init__(f"Unsupported AI processing type: {processing_type}")


class ProcessingFailedError(ContentProcessingError):
    """The model capability or a transform failed; never cached."""

    def __init__(self, processing_type: str, cause: BaseException):
        self.processing_type = processing_type
        self.cause = cause
        super().__init__(f"{processing_type} processing failed: {cause}")


class BatchProcessingFailedError(ContentProcessingError):
    """A request inside a batch window failed; the whole batch is discarded."""

    def __init__(self, batch_index: int, request_index: int, cause: BaseException):
        self.batch_index = batch_index
        self.request_index = request_index
        self.cause = cause
        super().__init__(
            f"Batch window {batch_index} failed at request {request_index}: {cause}"
        )
