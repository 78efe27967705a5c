"""Merge per-chunk results into one bounded transcript-level result."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.pipeline_config import PipelineConfig, SummaryPolicy
from src.processing.chunking import split_sentences
from src.processing.models import ContentType, ProcessingResult, ReminderItem, TaskItem
from src.processing.similarity import dedupe


def rank_tasks(
    tasks: Iterable[TaskItem],
    limit: int = 15,
    similarity_threshold: float = 0.8,
) -> list[TaskItem]:
    """Dedupe, order by priority then descending confidence, and cap at *limit*."""
    unique = dedupe(tasks, similarity_threshold)
    unique.sort(key=lambda t: (t.priority.sort_order, -t.confidence))
    return unique[:limit]


def rank_reminders(
    reminders: Iterable[ReminderItem],
    limit: int = 15,
    similarity_threshold: float = 0.8,
) -> list[ReminderItem]:
    """Dedupe, order by urgency then descending confidence, and cap at *limit*."""
    unique = dedupe(reminders, similarity_threshold)
    unique.sort(key=lambda r: (r.urgency.sort_order, -r.confidence))
    return unique[:limit]


def consolidate_summaries(
    summaries: Sequence[str],
    policy: SummaryPolicy = SummaryPolicy.CONCATENATE,
    max_sentences: int = 5,
    similarity_threshold: float = 0.8,
) -> str:
    """Combine per-chunk summaries in chunk order.

    ``CONCATENATE`` joins every non-blank summary with a blank line.
    ``DEDUPLICATE`` splits all summaries into sentences, drops sentences that
    repeat an earlier one (case-insensitively or by Jaccard similarity), keeps
    the first *max_sentences* survivors and rejoins them.
    """
    parts = [s.strip() for s in summaries if s.strip()]
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0]

    if policy is SummaryPolicy.CONCATENATE:
        return "\n\n".join(parts)

    sentences = split_sentences(" ".join(parts))
    seen: set[str] = set()
    distinct: list[str] = []
    for sentence in sentences:
        lowered = sentence.lower()
        if lowered not in seen:
            seen.add(lowered)
            distinct.append(sentence)

    kept = dedupe(distinct, similarity_threshold, key=lambda s: s)[:max_sentences]
    if not kept:
        return ""
    return ". ".join(kept) + "."


def consolidate(
    results: Sequence[ProcessingResult],
    config: PipelineConfig | None = None,
) -> ProcessingResult:
    """Merge chunk results, preserving chunk order.

    The first result's content type wins. Tasks and reminders from all chunks
    are concatenated, deduplicated, ranked and capped.

    Args:
        results: Per-chunk results in chunk order.
        config: Caps, thresholds and summary policy.

    Returns:
        A single bounded :class:`ProcessingResult`.
    """
    cfg = config or PipelineConfig()
    if not results:
        return ProcessingResult(summary="", content_type=ContentType.GENERAL)

    summary = consolidate_summaries(
        [r.summary for r in results],
        policy=cfg.summary_policy,
        max_sentences=cfg.max_summary_sentences,
        similarity_threshold=cfg.similarity_threshold,
    )
    tasks = rank_tasks(
        (t for r in results for t in r.tasks),
        limit=cfg.max_tasks,
        similarity_threshold=cfg.similarity_threshold,
    )
    reminders = rank_reminders(
        (rem for r in results for rem in r.reminders),
        limit=cfg.max_reminders,
        similarity_threshold=cfg.similarity_threshold,
    )

    return ProcessingResult(
        summary=summary,
        tasks=tuple(tasks),
        reminders=tuple(reminders),
        content_type=results[0].content_type,
    )
