"""Claude engine using forced tool use for structured output."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import anthropic
from anthropic import AsyncAnthropic

from src.engines.parsing import result_from_payload
from src.engines.prompts import build_system_prompt
from src.processing.classifier import classify_content
from src.processing.errors import ServiceUnavailable
from src.processing.models import ContentType, ProcessingResult

logger = logging.getLogger(__name__)

# Tool definition for Claude structured output
SUMMARY_TOOL: dict[str, Any] = {
    "name": "store_summary",
    "description": (
        "Store the analysis of a transcript. "
        "Call this once with the summary and all extracted tasks and reminders."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "summary": {
                "type": "string",
                "description": "A detailed summary of the content.",
            },
            "tasks": {
                "type": "array",
                "description": "Actionable tasks the speaker needs to do.",
                "items": {
                    "type": "object",
                    "properties": {
                        "text": {"type": "string", "description": "Task description."},
                        "priority": {"type": "string", "enum": ["high", "medium", "low"]},
                        "category": {
                            "type": "string",
                            "enum": [
                                "call",
                                "meeting",
                                "purchase",
                                "research",
                                "email",
                                "travel",
                                "health",
                                "general",
                            ],
                        },
                        "timeReference": {
                            "type": "string",
                            "description": "When it should happen, e.g. 'tomorrow' (null if none).",
                        },
                        "confidence": {"type": "number", "description": "Confidence score 0-1."},
                    },
                    "required": ["text", "confidence"],
                },
            },
            "reminders": {
                "type": "array",
                "description": "Time-sensitive things to remember.",
                "items": {
                    "type": "object",
                    "properties": {
                        "text": {"type": "string", "description": "Reminder description."},
                        "urgency": {
                            "type": "string",
                            "enum": ["immediate", "today", "thisWeek", "later"],
                        },
                        "timeReference": {
                            "type": "string",
                            "description": "Specific time or date mentioned.",
                        },
                        "confidence": {"type": "number", "description": "Confidence score 0-1."},
                    },
                    "required": ["text", "confidence"],
                },
            },
        },
        "required": ["summary", "tasks", "reminders"],
    },
}


@dataclass(frozen=True)
class ClaudeEngineConfig:
    api_key: str
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    enabled: bool = True

    @property
    def is_configured(self) -> bool:
        return self.enabled and bool(self.api_key)


class ClaudeEngine:
    """Summarize text with Claude, returning results through the ``store_summary`` tool."""

    name = "Claude"

    def __init__(self, config: ClaudeEngineConfig, client: AsyncAnthropic | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def is_available(self) -> bool:
        return self.config.is_configured

    @property
    def client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self.config.api_key)
        return self._client

    async def complete(self, text: str) -> ProcessingResult:
        if not self.is_available:
            raise ServiceUnavailable("Claude is not configured. Add an API key in settings.")

        content_type = classify_content(text)
        try:
            response = await self.client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                system=build_system_prompt(content_type)
                + " Use the store_summary tool to return your results.",
                tools=[SUMMARY_TOOL],
                tool_choice={"type": "tool", "name": "store_summary"},
                messages=[
                    {
                        "role": "user",
                        "content": f"Analyze this transcript:\n\n{text}",
                    }
                ],
            )
        except anthropic.RateLimitError as exc:
            raise ServiceUnavailable("Claude rate limit exceeded. Please try again later.") from exc
        except anthropic.AuthenticationError as exc:
            raise ServiceUnavailable("Claude API key is invalid or was rejected.") from exc
        except anthropic.APITimeoutError as exc:
            raise ServiceUnavailable("Claude request timed out. Please try again.") from exc
        except anthropic.AnthropicError as exc:
            logger.warning("Claude request failed: %s", exc)
            raise ServiceUnavailable(f"Claude request failed: {exc}") from exc

        return _parse_tool_response(response, content_type)


def _parse_tool_response(response: Any, content_type: ContentType) -> ProcessingResult:
    """Parse the Claude tool_use response into a ProcessingResult."""
    for block in response.content:
        if block.type != "tool_use":
            continue
        if block.name != "store_summary":
            continue

        data = block.input
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError as exc:
                raise ServiceUnavailable("Claude returned malformed store_summary input") from exc
        if not isinstance(data, dict):
            raise ServiceUnavailable("Claude returned malformed store_summary input")
        return result_from_payload(data, content_type)

    raise ServiceUnavailable("Claude response did not include a store_summary tool call")
