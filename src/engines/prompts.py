"""Prompt text shared by the LLM-backed engines."""

from __future__ import annotations

from src.processing.models import ContentType

_BASE_PROMPT = "You are an expert AI assistant specialized in analyzing and summarizing content."

_CONTENT_CONTEXT: dict[ContentType, str] = {
    ContentType.MEETING: (
        "This content is from a meeting or discussion. Focus on decisions, "
        "action items, and key discussion points."
    ),
    ContentType.PERSONAL_JOURNAL: (
        "This content is from a personal journal or reflection. Focus on "
        "insights, emotions, and personal experiences."
    ),
    ContentType.TECHNICAL: (
        "This content is technical in nature. Focus on concepts, solutions, "
        "and important technical details."
    ),
    ContentType.GENERAL: "This is general content. Provide a balanced analysis of the main points.",
}

_COMPLETE_TASK = (
    "Provide a comprehensive analysis including summary, tasks, and reminders. "
    "Use clear, structured formatting."
)

RESPONSE_FORMAT = """\
{
    "summary": "A detailed summary of the content",
    "tasks": [
        {
            "text": "task description",
            "priority": "high|medium|low",
            "category": "call|meeting|purchase|research|email|travel|health|general",
            "timeReference": "today|tomorrow|this week|next week|specific date or null",
            "confidence": 0.85
        }
    ],
    "reminders": [
        {
            "text": "reminder description",
            "urgency": "immediate|today|thisWeek|later",
            "timeReference": "specific time or date mentioned",
            "confidence": 0.85
        }
    ]
}"""


def build_system_prompt(content_type: ContentType) -> str:
    """System prompt framed by the detected content type."""
    return f"{_BASE_PROMPT} {_CONTENT_CONTEXT[content_type]} {_COMPLETE_TASK}"


def build_user_prompt(text: str) -> str:
    """User prompt asking for the JSON response shape parsed by ``parse_complete_response``."""
    return (
        "Please analyze the following content and provide a comprehensive response "
        f"in JSON format with the following structure:\n{RESPONSE_FORMAT}\n\n"
        "Return ONLY the JSON object.\n\n"
        f"Content:\n{text}"
    )
