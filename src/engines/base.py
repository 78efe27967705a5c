"""Summarization engine capability shared by every backend."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from src.processing.models import ProcessingResult


@runtime_checkable
class SummarizationEngine(Protocol):
    """A backend that turns text into a summary plus extracted tasks and reminders.

    ``complete`` may raise :class:`~src.processing.errors.ServiceUnavailable`
    or any transport error; callers treat failures as retryable.
    """

    name: str

    @property
    def is_available(self) -> bool: ...

    async def complete(self, text: str) -> ProcessingResult: ...
