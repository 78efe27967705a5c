"""End-to-end summarization pipeline: decide -> chunk -> process -> consolidate."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from src.pipeline_config import PipelineConfig
from src.processing.cache import ResultCache, make_cache_key
from src.processing.chunking import chunk_text, estimate_tokens, needs_chunking, split_sentences
from src.processing.consolidation import consolidate
from src.processing.errors import InvalidInput, ProcessingFailed
from src.processing.models import ProcessingResult
from src.processing.processor import ChunkProcessor

if TYPE_CHECKING:
    from src.engines.base import SummarizationEngine

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

# Share of the progress bar spent on chunk processing; the rest covers consolidation.
_CHUNK_PROGRESS_SHARE = 0.8


async def summarize_transcript(
    text: str,
    engine: SummarizationEngine,
    config: PipelineConfig | None = None,
    cache: ResultCache | None = None,
    processor: ChunkProcessor | None = None,
    on_progress: ProgressCallback | None = None,
) -> ProcessingResult:
    """Summarize a transcript, chunking it when it exceeds the context budget.

    Short transcripts go to the engine in one call. Long ones are split into
    sentence-aligned chunks that are processed strictly in order with retry;
    the first chunk that exhausts its retries aborts the whole run.

    Args:
        text: Raw transcript text.
        engine: Backend that produces per-text results.
        config: Budgets, caps and policies. Defaults to :class:`PipelineConfig`.
        cache: Optional shared result cache keyed by engine name and text.
        processor: Retry wrapper; built from ``config.max_retries`` if omitted.
        on_progress: Called with a fraction in [0, 1] as work advances.

    Returns:
        The bounded transcript-level :class:`ProcessingResult`.

    Raises:
        InvalidInput: If *text* is blank or has no sentences.
        ProcessingFailed: If a chunk fails after all retries.
        ServiceUnavailable: If the single-call path fails.
    """
    cfg = config or PipelineConfig()
    if not text or not text.strip():
        raise InvalidInput("Transcript is empty")

    if not split_sentences(text):
        raise InvalidInput("Transcript contains no sentences to process")

    cache_key = make_cache_key(engine.name, text, cfg)
    if cache is not None:
        cached = cache.get(cache_key)
        if cached is not None:
            logger.info("Using cached result for %s transcript", engine.name)
            _report(on_progress, 1.0)
            return cached

    started = time.perf_counter()
    _report(on_progress, 0.0)

    # 1. Decide
    token_count = estimate_tokens(text)
    if not needs_chunking(text, cfg.max_context_tokens):
        logger.info("Processing single chunk (%d tokens) with %s", token_count, engine.name)
        # 2a. Direct call; still capped so the final result is always bounded
        result = consolidate([await engine.complete(text)], cfg)
    else:
        # 2b. Chunk -> process each in order -> consolidate
        processor = processor or ChunkProcessor(max_retries=cfg.max_retries)
        chunks = chunk_text(text, cfg.max_words_per_chunk)
        logger.info(
            "Large transcript detected (%d tokens), processing %d chunks with %s",
            token_count,
            len(chunks),
            engine.name,
        )

        chunk_results: list[ProcessingResult] = []
        for chunk in chunks:
            _report(on_progress, chunk.index / len(chunks) * _CHUNK_PROGRESS_SHARE)
            try:
                chunk_results.append(await processor.process_chunk(chunk, engine))
            except ProcessingFailed:
                logger.error(
                    "Abandoning transcript: chunk %d of %d failed", chunk.index + 1, len(chunks)
                )
                raise

        _report(on_progress, 0.9)
        result = consolidate(chunk_results, cfg)

    if cache is not None:
        cache.put(cache_key, result, cost=len(text.encode("utf-8")))

    _report(on_progress, 1.0)
    logger.info(
        "Summarization completed in %.2fs: %d tasks, %d reminders, %s",
        time.perf_counter() - started,
        len(result.tasks),
        len(result.reminders),
        result.content_type,
    )
    return result


def _report(callback: ProgressCallback | None, fraction: float) -> None:
    if callback is not None:
        callback(fraction)
