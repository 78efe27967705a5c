"""Pydantic request/response schemas for the Transcript Summarizer API."""

from __future__ import annotations

from pydantic import BaseModel

from src.pipeline_config import EngineKind, SummaryPolicy
from src.processing.models import ProcessingResult


class ClassifyRequest(BaseModel):
    """Request body for the /api/classify endpoint."""

    text: str


class ClassifyResponse(BaseModel):
    """Detected content type plus the per-category scores behind it."""

    content_type: str
    scores: dict[str, float]


class SummarizeRequest(BaseModel):
    """Request body for the /api/summarize endpoint."""

    text: str
    engine: EngineKind | None = None
    summary_policy: SummaryPolicy | None = None


class TaskResponse(BaseModel):
    text: str
    priority: str
    category: str
    time_reference: str | None = None
    confidence: float


class ReminderResponse(BaseModel):
    text: str
    urgency: str
    time_reference: str
    confidence: float


class SummarizeResponse(BaseModel):
    """Response body for the /api/summarize endpoint."""

    engine: str
    content_type: str
    summary: str
    tasks: list[TaskResponse]
    reminders: list[ReminderResponse]

    @classmethod
    def from_result(cls, engine: str, result: ProcessingResult) -> SummarizeResponse:
        return cls(
            engine=engine,
            content_type=result.content_type.value,
            summary=result.summary,
            tasks=[
                TaskResponse(
                    text=t.text,
                    priority=t.priority.value,
                    category=t.category.value,
                    time_reference=t.time_reference,
                    confidence=t.confidence,
                )
                for t in result.tasks
            ],
            reminders=[
                ReminderResponse(
                    text=r.text,
                    urgency=r.urgency.value,
                    time_reference=r.time_reference.display_text,
                    confidence=r.confidence,
                )
                for r in result.reminders
            ],
        )


class EngineStatus(BaseModel):
    """Availability of one summarization engine."""

    kind: str
    name: str
    available: bool
    reason: str | None = None
