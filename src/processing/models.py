"""Data models for the transcript processing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class ContentType(StrEnum):
    """Coarse genre label attached to a processed transcript."""

    MEETING = "meeting"
    PERSONAL_JOURNAL = "personal_journal"
    TECHNICAL = "technical"
    GENERAL = "general"

    @property
    def description(self) -> str:
        return _CONTENT_DESCRIPTIONS[self]


_CONTENT_DESCRIPTIONS: dict[ContentType, str] = {
    ContentType.MEETING: "Meeting or conversation with multiple participants",
    ContentType.PERSONAL_JOURNAL: "Personal thoughts, experiences, and reflections",
    ContentType.TECHNICAL: "Technical discussions, documentation, or instructions",
    ContentType.GENERAL: "General content that doesn't fit other categories",
}


class Priority(StrEnum):
    """Task priority. Lower ``sort_order`` sorts first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def sort_order(self) -> int:
        return list(Priority).index(self)


class TaskCategory(StrEnum):
    """What kind of action a task asks for."""

    CALL = "call"
    MEETING = "meeting"
    PURCHASE = "purchase"
    RESEARCH = "research"
    EMAIL = "email"
    TRAVEL = "travel"
    HEALTH = "health"
    GENERAL = "general"


class Urgency(StrEnum):
    """Reminder urgency. Lower ``sort_order`` sorts first."""

    IMMEDIATE = "immediate"
    TODAY = "today"
    THIS_WEEK = "this_week"
    LATER = "later"

    @property
    def sort_order(self) -> int:
        return list(Urgency).index(self)


def _check_confidence(confidence: float) -> None:
    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"confidence must be within [0, 1], got {confidence}")


@dataclass(frozen=True)
class TimeReference:
    """A time description attached to a reminder, parsed or raw."""

    original_text: str
    parsed_date: datetime | None = None
    relative_time: str | None = None

    @property
    def is_specific(self) -> bool:
        return self.parsed_date is not None

    @property
    def display_text(self) -> str:
        if self.relative_time:
            return self.relative_time
        if self.parsed_date is not None:
            return self.parsed_date.isoformat(sep=" ", timespec="minutes")
        return self.original_text


@dataclass(frozen=True)
class TaskItem:
    """An actionable task extracted from a transcript."""

    text: str
    priority: Priority = Priority.MEDIUM
    category: TaskCategory = TaskCategory.GENERAL
    time_reference: str | None = None
    confidence: float = 0.5

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)

    @property
    def display_text(self) -> str:
        if self.time_reference:
            return f"{self.text} ({self.time_reference})"
        return self.text


@dataclass(frozen=True)
class ReminderItem:
    """A time-bound reminder extracted from a transcript."""

    text: str
    time_reference: TimeReference
    urgency: Urgency = Urgency.LATER
    confidence: float = 0.5

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)

    @property
    def display_text(self) -> str:
        return f"{self.text} - {self.time_reference.display_text}"


@dataclass(frozen=True)
class ProcessingResult:
    """Summary plus extractions for one chunk or a whole transcript."""

    summary: str
    tasks: tuple[TaskItem, ...] = field(default_factory=tuple)
    reminders: tuple[ReminderItem, ...] = field(default_factory=tuple)
    content_type: ContentType = ContentType.GENERAL


@dataclass(frozen=True)
class Chunk:
    """A sentence-aligned slice of a transcript."""

    index: int
    text: str

    @property
    def word_count(self) -> int:
        return len(self.text.split())
