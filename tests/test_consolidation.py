"""Tests for merging chunk results into one bounded result."""

from __future__ import annotations

import random

from src.pipeline_config import PipelineConfig, SummaryPolicy
from src.processing.consolidation import (
    consolidate,
    consolidate_summaries,
    rank_reminders,
    rank_tasks,
)
from src.processing.models import (
    ContentType,
    Priority,
    ProcessingResult,
    ReminderItem,
    TaskItem,
    TimeReference,
    Urgency,
)


def _reminder(text: str, urgency: Urgency = Urgency.LATER, confidence: float = 0.5) -> ReminderItem:
    return ReminderItem(
        text=text,
        time_reference=TimeReference(original_text="soon"),
        urgency=urgency,
        confidence=confidence,
    )


class TestRankTasks:
    def test_orders_by_priority_then_confidence(self) -> None:
        tasks = [
            TaskItem(text="low task", priority=Priority.LOW, confidence=0.99),
            TaskItem(text="medium task", priority=Priority.MEDIUM, confidence=0.5),
            TaskItem(text="high unsure", priority=Priority.HIGH, confidence=0.6),
            TaskItem(text="high sure", priority=Priority.HIGH, confidence=0.9),
        ]

        ranked = rank_tasks(tasks)

        assert [t.text for t in ranked] == ["high sure", "high unsure", "medium task", "low task"]

    def test_caps_at_limit(self) -> None:
        tasks = [TaskItem(text=f"task number {i}") for i in range(20)]
        assert len(rank_tasks(tasks, limit=15)) == 15

    def test_removes_near_duplicates(self) -> None:
        tasks = [TaskItem(text="Buy the milk"), TaskItem(text="buy milk")]
        assert len(rank_tasks(tasks)) == 1


class TestRankReminders:
    def test_orders_by_urgency_then_confidence(self) -> None:
        reminders = [
            _reminder("later thing", Urgency.LATER, 0.9),
            _reminder("weekly thing", Urgency.THIS_WEEK, 0.9),
            _reminder("today thing", Urgency.TODAY, 0.4),
            _reminder("urgent thing", Urgency.IMMEDIATE, 0.1),
            _reminder("today sure thing", Urgency.TODAY, 0.95),
        ]

        ranked = rank_reminders(reminders)

        assert [r.text for r in ranked] == [
            "urgent thing",
            "today sure thing",
            "today thing",
            "weekly thing",
            "later thing",
        ]


class TestConsolidateSummaries:
    def test_concatenate_in_chunk_order(self) -> None:
        result = consolidate_summaries(["First part.", "  ", "Second part."])
        assert result == "First part.\n\nSecond part."

    def test_single_summary_unchanged(self) -> None:
        assert consolidate_summaries(["Only one! Really?"], SummaryPolicy.DEDUPLICATE) == (
            "Only one! Really?"
        )

    def test_all_blank(self) -> None:
        assert consolidate_summaries(["", "   "]) == ""

    def test_deduplicate_drops_repeats(self) -> None:
        result = consolidate_summaries(
            [
                "The team agreed on the budget. Alice will email Bob.",
                "the team agreed on the budget. Launch is Friday.",
            ],
            SummaryPolicy.DEDUPLICATE,
        )
        assert result == "The team agreed on the budget. Alice will email Bob. Launch is Friday."

    def test_deduplicate_caps_sentences(self) -> None:
        summaries = ["Alpha one. Bravo two. Charlie three.", "Delta four. Echo five. Foxtrot six."]
        result = consolidate_summaries(summaries, SummaryPolicy.DEDUPLICATE, max_sentences=5)
        assert result == "Alpha one. Bravo two. Charlie three. Delta four. Echo five."


class TestConsolidate:
    def test_empty_results(self) -> None:
        result = consolidate([])
        assert result == ProcessingResult(summary="", content_type=ContentType.GENERAL)

    def test_first_content_type_wins(self) -> None:
        results = [
            ProcessingResult(summary="a.", content_type=ContentType.MEETING),
            ProcessingResult(summary="b.", content_type=ContentType.TECHNICAL),
        ]
        assert consolidate(results).content_type is ContentType.MEETING

    def test_merges_and_caps_across_chunks(self) -> None:
        results = [
            ProcessingResult(
                summary=f"Part {n}.",
                tasks=tuple(TaskItem(text=f"task {n * 10 + i}") for i in range(10)),
                reminders=tuple(_reminder(f"reminder {n * 10 + i}") for i in range(10)),
            )
            for n in range(3)
        ]

        merged = consolidate(results, PipelineConfig(max_tasks=15, max_reminders=15))

        assert len(merged.tasks) == 15
        assert len(merged.reminders) == 15
        assert merged.summary == "Part 0.\n\nPart 1.\n\nPart 2."

    def test_duplicates_across_chunks_collapse(self) -> None:
        results = [
            ProcessingResult(summary="a.", reminders=(_reminder("Call the dentist tomorrow"),)),
            ProcessingResult(summary="b.", reminders=(_reminder("Call dentist tomorrow"),)),
        ]
        merged = consolidate(results)

        assert [r.text for r in merged.reminders] == ["Call the dentist tomorrow"]


def _task_rank(task: TaskItem) -> tuple[int, float]:
    return (task.priority.sort_order, -task.confidence)


def _reminder_rank(reminder: ReminderItem) -> tuple[int, float]:
    return (reminder.urgency.sort_order, -reminder.confidence)

class TestCapInvariant:
    """Looped checks over generated chunk results with duplicates and mixed ranks."""

    @staticmethod
    def _split_into_chunks(rng: random.Random, items: list) -> list[list]:
        cuts = sorted(rng.sample(range(1, len(items)), rng.randint(0, 3)))
        bounds = [0, *cuts, len(items)]
        return [items[a:b] for a, b in zip(bounds, bounds[1:])]

    def test_tasks_keep_the_best_ranked_distinct_items(self) -> None:
        rng = random.Random(11)
        for seed in range(40):
            distinct = [
                TaskItem(
                    text=f"task{seed}_{i} errand{seed}_{i}",
                    priority=rng.choice(list(Priority)),
                    confidence=round(rng.random(), 2),
                )
                for i in range(rng.randint(16, 40))
            ]
            items = list(distinct)
            for original in rng.sample(distinct, 8):
                # a shouted copy is a near-duplicate; it lands after its original
                position = rng.randint(items.index(original) + 1, len(items))
                items.insert(
                    position,
                    TaskItem(
                        text=original.text.upper() + "!",
                        priority=Priority.HIGH,
                        confidence=1.0,
                    ),
                )
            results = [
                ProcessingResult(summary=f"Part {n}.", tasks=tuple(chunk))
                for n, chunk in enumerate(self._split_into_chunks(rng, items))
            ]

            kept = list(consolidate(results).tasks)

            assert len(kept) == 15, seed
            assert kept == sorted(distinct, key=_task_rank)[:15], seed
            dropped = [t for t in distinct if t not in kept]
            assert max(map(_task_rank, kept)) <= min(map(_task_rank, dropped)), seed

    def test_reminders_keep_the_most_urgent_distinct_items(self) -> None:
        rng = random.Random(23)
        for seed in range(40):
            distinct = [
                _reminder(
                    f"reminder{seed}_{i} note{seed}_{i}",
                    rng.choice(list(Urgency)),
                    round(rng.random(), 2),
                )
                for i in range(rng.randint(16, 40))
            ]
            items = list(distinct)
            for original in rng.sample(distinct, 8):
                position = rng.randint(items.index(original) + 1, len(items))
                items.insert(position, _reminder(original.text.upper(), Urgency.IMMEDIATE, 1.0))
            results = [
                ProcessingResult(summary=f"Part {n}.", reminders=tuple(chunk))
                for n, chunk in enumerate(self._split_into_chunks(rng, items))
            ]

            kept = list(consolidate(results).reminders)

            assert len(kept) == 15, seed
            assert kept == sorted(distinct, key=_reminder_rank)[:15], seed
            dropped = [r for r in distinct if r not in kept]
            assert max(map(_reminder_rank, kept)) <= min(map(_reminder_rank, dropped)), seed
