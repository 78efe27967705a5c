"""Placeholder engine for backends that cannot be used in this deployment."""

from __future__ import annotations

from src.processing.errors import ServiceUnavailable
from src.processing.models import ProcessingResult


class UnavailableEngine:
    """Engine that always fails with the reason it is unavailable."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason

    @property
    def is_available(self) -> bool:
        return False

    async def complete(self, text: str) -> ProcessingResult:
        raise ServiceUnavailable(f"{self.name} is unavailable: {self.reason}")
