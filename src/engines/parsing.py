"""Parse LLM responses into summaries, tasks and reminders."""

from __future__ import annotations

import json
import logging
from typing import Any

from src.processing.errors import ServiceUnavailable
from src.processing.models import (
    ContentType,
    Priority,
    ProcessingResult,
    ReminderItem,
    TaskCategory,
    TaskItem,
    TimeReference,
    Urgency,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.8
NO_TIME_SPECIFIED = "No time specified"


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapping a JSON payload."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = [ln for ln in lines if not ln.strip().startswith("```")]
        text = "\n".join(lines).strip()
    return text


def _clamp_confidence(value: Any) -> float:
    """Clamp a model-reported confidence to [0.0, 1.0]."""
    try:
        return max(0.0, min(1.0, float(value)))
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE


def _enum_key(value: Any) -> str:
    return str(value).strip().lower().replace(" ", "_")


def parse_priority(value: Any) -> Priority:
    try:
        return Priority(_enum_key(value))
    except ValueError:
        return Priority.MEDIUM


def parse_category(value: Any) -> TaskCategory:
    try:
        return TaskCategory(_enum_key(value))
    except ValueError:
        return TaskCategory.GENERAL


def parse_urgency(value: Any) -> Urgency:
    key = _enum_key(value)
    if key == "thisweek":
        return Urgency.THIS_WEEK
    try:
        return Urgency(key)
    except ValueError:
        return Urgency.LATER


def parse_task(data: dict[str, Any]) -> TaskItem | None:
    """Build a TaskItem from one JSON object, or None if it has no text."""
    text = str(data.get("text") or "").strip()
    if not text:
        return None
    time_reference = data.get("timeReference") or data.get("time_reference")
    return TaskItem(
        text=text,
        priority=parse_priority(data.get("priority", "medium")),
        category=parse_category(data.get("category", "general")),
        time_reference=str(time_reference) if time_reference else None,
        confidence=_clamp_confidence(data.get("confidence", DEFAULT_CONFIDENCE)),
    )


def parse_reminder(data: dict[str, Any]) -> ReminderItem | None:
    """Build a ReminderItem from one JSON object, or None if it has no text."""
    text = str(data.get("text") or "").strip()
    if not text:
        return None
    time_reference = data.get("timeReference") or data.get("time_reference")
    return ReminderItem(
        text=text,
        time_reference=TimeReference(
            original_text=str(time_reference) if time_reference else NO_TIME_SPECIFIED
        ),
        urgency=parse_urgency(data.get("urgency", "later")),
        confidence=_clamp_confidence(data.get("confidence", DEFAULT_CONFIDENCE)),
    )


def result_from_payload(data: dict[str, Any], content_type: ContentType) -> ProcessingResult:
    """Map a decoded ``{"summary", "tasks", "reminders"}`` payload to a result."""
    tasks = [parse_task(t) for t in data.get("tasks") or [] if isinstance(t, dict)]
    reminders = [parse_reminder(r) for r in data.get("reminders") or [] if isinstance(r, dict)]
    return ProcessingResult(
        summary=str(data.get("summary") or "").strip(),
        tasks=tuple(t for t in tasks if t is not None),
        reminders=tuple(r for r in reminders if r is not None),
        content_type=content_type,
    )


def parse_complete_response(raw: str, content_type: ContentType, service: str) -> ProcessingResult:
    """Parse a complete-analysis JSON response from an LLM.

    Args:
        raw: Raw model output, possibly wrapped in markdown fences.
        content_type: Content type to attach to the result.
        service: Engine name used in error messages.

    Returns:
        The parsed result. Output that is not JSON becomes a summary-only result.

    Raises:
        ServiceUnavailable: If the model returned nothing or an empty object.
    """
    cleaned = strip_code_fences(raw or "")
    if not cleaned:
        raise ServiceUnavailable(f"{service} returned an empty response")
    if cleaned == "{}":
        raise ServiceUnavailable(
            f"{service} returned an empty JSON object - check API key and model configuration"
        )

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("%s response was not JSON; using it as the summary", service)
        return ProcessingResult(summary=cleaned, content_type=content_type)

    if not isinstance(data, dict):
        raise ServiceUnavailable(f"{service} returned unexpected JSON: {type(data).__name__}")

    return result_from_payload(data, content_type)
