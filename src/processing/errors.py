"""Error taxonomy for summarization."""

from __future__ import annotations


class SummarizationError(Exception):
    """Base class for all summarization failures.

    ``reason`` is the human-readable message surfaced to callers verbatim.
    """

    recovery_suggestion: str = "Try regenerating the summary or switch to a different engine."

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ServiceUnavailable(SummarizationError):
    """The backend could not be reached, is disabled, or rejected the request."""

    recovery_suggestion = "Switch to a different engine in settings or try again later."


class ProcessingFailed(SummarizationError):
    """A chunk could not produce a result after all retries."""


class InvalidInput(SummarizationError):
    """The transcript is empty or cannot be split into sentences."""

    recovery_suggestion = "Make sure the recording was transcribed properly."
