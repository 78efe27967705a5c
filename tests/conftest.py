"""Shared fakes for pipeline tests (no network, no real sleeps)."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from src.processing.models import ContentType, ProcessingResult


class ScriptedEngine:
    """Engine that fails a fixed number of times per text, then succeeds.

    ``respond`` builds the result for a text; by default it echoes the text as
    the summary.
    """

    name = "Scripted"

    def __init__(
        self,
        failures: int | dict[str, int] = 0,
        respond: Callable[[str], ProcessingResult] | None = None,
    ) -> None:
        self.failures = failures
        self.respond = respond or (
            lambda text: ProcessingResult(summary=text, content_type=ContentType.GENERAL)
        )
        self.calls: list[str] = []

    @property
    def is_available(self) -> bool:
        return True

    def _failures_for(self, text: str) -> int:
        if isinstance(self.failures, dict):
            return self.failures.get(text, 0)
        return self.failures

    async def complete(self, text: str) -> ProcessingResult:
        self.calls.append(text)
        if self.calls.count(text) <= self._failures_for(text):
            raise ConnectionError(f"backend down ({self.calls.count(text)})")
        return self.respond(text)


class RecordingSleep:
    """Async stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def scripted_engine() -> type[ScriptedEngine]:
    return ScriptedEngine
