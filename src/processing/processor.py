"""Per-chunk engine invocation with bounded retry and exponential backoff."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from src.processing.errors import ProcessingFailed
from src.processing.models import Chunk, ProcessingResult

if TYPE_CHECKING:
    from src.engines.base import SummarizationEngine

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class ChunkProcessor:
    """Run one chunk through an engine, retrying transient failures.

    Attempt ``n`` (0-based) that fails is followed by a delay of
    ``backoff_base ** n`` seconds before the next attempt, so the default
    schedule is 1s, 2s, 4s, ... No delay follows the final attempt.
    """

    def __init__(
        self,
        max_retries: int = 2,
        backoff_base: float = 2.0,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self._sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        return float(self.backoff_base**attempt)

    async def process_chunk(
        self, chunk: Chunk, engine: SummarizationEngine
    ) -> ProcessingResult:
        """Return the engine's result for *chunk*.

        Raises:
            ProcessingFailed: After ``max_retries + 1`` failed attempts, chained
                from the last underlying error.
        """
        last_error: Exception | None = None
        attempts = self.max_retries + 1

        for attempt in range(attempts):
            try:
                return await engine.complete(chunk.text)
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Chunk %d attempt %d/%d failed on %s: %s",
                    chunk.index,
                    attempt + 1,
                    attempts,
                    engine.name,
                    exc,
                )
                if attempt < self.max_retries:
                    await self._sleep(self.backoff_delay(attempt))

        raise ProcessingFailed(
            f"Chunk {chunk.index} failed after {attempts} attempts: {last_error}"
        ) from last_error
