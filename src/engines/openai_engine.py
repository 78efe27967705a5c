"""OpenAI chat-completions engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import openai
from openai import AsyncOpenAI

from src.engines.parsing import parse_complete_response
from src.engines.prompts import build_system_prompt, build_user_prompt
from src.processing.classifier import classify_content
from src.processing.errors import ServiceUnavailable
from src.processing.models import ProcessingResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenAIEngineConfig:
    api_key: str
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"
    temperature: float = 0.1
    max_tokens: int | None = None
    enabled: bool = True

    @property
    def is_configured(self) -> bool:
        return self.enabled and self.api_key.startswith("sk-")


def map_openai_error(exc: Exception) -> ServiceUnavailable:
    """Translate an OpenAI SDK failure into a user-facing ServiceUnavailable."""
    message = str(exc).lower()
    if "quota" in message or "billing" in message:
        return ServiceUnavailable("OpenAI API quota exceeded. Please check your billing status.")
    if isinstance(exc, openai.RateLimitError) or "rate limit" in message:
        return ServiceUnavailable("OpenAI API rate limit exceeded. Please try again later.")
    if isinstance(exc, openai.AuthenticationError):
        return ServiceUnavailable("OpenAI API key is invalid or was rejected.")
    if isinstance(exc, openai.APITimeoutError):
        return ServiceUnavailable("OpenAI request timed out. Please try again.")
    return ServiceUnavailable(f"OpenAI request failed: {exc}")


class OpenAIEngine:
    """Summarize text with an OpenAI chat model in JSON mode."""

    name = "OpenAI"

    def __init__(self, config: OpenAIEngineConfig, client: AsyncOpenAI | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def is_available(self) -> bool:
        return self.config.is_configured

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.config.api_key, base_url=self.config.base_url)
        return self._client

    async def complete(self, text: str) -> ProcessingResult:
        if not self.is_available:
            raise ServiceUnavailable("OpenAI is not configured. Add an API key in settings.")

        content_type = classify_content(text)
        request: dict[str, Any] = {
            "model": self.config.model,
            "temperature": self.config.temperature,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": build_system_prompt(content_type)},
                {"role": "user", "content": build_user_prompt(text)},
            ],
        }
        if self.config.max_tokens is not None:
            request["max_tokens"] = self.config.max_tokens

        try:
            response = await self.client.chat.completions.create(**request)
        except openai.OpenAIError as exc:
            logger.warning("OpenAI request failed: %s", exc)
            raise map_openai_error(exc) from exc

        if not response.choices:
            raise ServiceUnavailable("OpenAI returned no choices")
        raw = response.choices[0].message.content or ""
        return parse_complete_response(raw, content_type, service=self.name)
