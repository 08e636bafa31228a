# src/processing/batch.py
"""Batch executor: fixed-size windows, concurrent within, sequential across.

Every request (shape, type and options) is validated before the first
model call. Windows run their requests concurrently and always settle
completely before the next one starts; a cooldown separates consecutive
windows to stay under provider rate limits. Any failure aborts the batch
and no partial results are returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Sequence

from contentengine.logging.context import set_batch_context
from contentengine.processing.errors import (
    BatchProcessingFailedError,
    InvalidRequestError,
    UnsupportedTypeError,
)
from contentengine.processing.models import (
    ProcessingRequest,
    ProcessingResult,
    parse_options,
    resolve_type,
)

if TYPE_CHECKING:
    from contentengine.processing.dispatcher import ProcessingDispatcher

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_DELAY_MS = 1000


def iter_windows(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    """Yield consecutive slices of at most ``size`` items."""
    for start in range(0, len(items), size):
        yield items[start : start + size]


class BatchExecutor:
    """Run many requests through a dispatcher in throttled windows.

    Args:
        dispatcher: Executes each individual request.
        batch_size: Requests per window; also the bound on concurrent
            model calls issued by one batch.
        delay_ms: Cooldown between windows (not after the last).
    """

    def __init__(
        self,
        dispatcher: ProcessingDispatcher,
        batch_size: int = DEFAULT_BATCH_SIZE,
        delay_ms: int = DEFAULT_DELAY_MS,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self._dispatcher = dispatcher
        self._batch_size = batch_size
        self._delay_s = delay_ms / 1000.0

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @staticmethod
    def validate(
        requests: Sequence[ProcessingRequest | Mapping[str, Any]],
    ) -> list[ProcessingRequest]:
        """Validate shape, type and options of every request up front.

        Raises:
            InvalidRequestError: Naming the first defective request index.
        """
        validated: list[ProcessingRequest] = []
        for index, request in enumerate(requests):
            try:
                req = ProcessingRequest.from_payload(request)
                parse_options(resolve_type(req.type), req.options)
            except (InvalidRequestError, UnsupportedTypeError) as e:
                raise InvalidRequestError(f"Request {index}: {e}") from e
            validated.append(req)
        return validated

    async def run(
        self,
        requests: Sequence[ProcessingRequest | Mapping[str, Any]],
    ) -> list[ProcessingResult]:
        """Process all requests; results are in input order.

        Raises:
            InvalidRequestError: A request is malformed (nothing executed).
            BatchProcessingFailedError: A request failed inside a window.
        """
        validated = self.validate(requests)
        windows = list(iter_windows(validated, self._batch_size))
        results: list[ProcessingResult] = []

        try:
            for batch_index, window in enumerate(windows):
                set_batch_context(batch_index)
                logger.debug(
                    "Batch window %d/%d: %d requests",
                    batch_index + 1, len(windows), len(window),
                )
                results.extend(await self._run_window(batch_index, window))

                if batch_index < len(windows) - 1 and self._delay_s > 0:
                    await asyncio.sleep(self._delay_s)
        finally:
            set_batch_context(None)

        logger.info("Batch processing completed: %d requests, %d windows",
                    len(results), len(windows))
        return results

    async def _run_window(
        self,
        batch_index: int,
        window: Sequence[ProcessingRequest],
    ) -> list[ProcessingResult]:
        outcomes = await asyncio.gather(
            *(self._dispatcher.process(request) for request in window),
            return_exceptions=True,
        )
        for offset, outcome in enumerate(outcomes):
            if isinstance(outcome, Exception):
                request_index = batch_index * self._batch_size + offset
                logger.error(
                    "Batch processing failed in window %d: %s", batch_index, outcome,
                    extra={"data": {"batch_index": batch_index, "request_index": request_index}},
                )
                raise BatchProcessingFailedError(batch_index, request_index, outcome) from outcome
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)
