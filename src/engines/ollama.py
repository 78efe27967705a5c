"""Local LLM engine talking to an Ollama server over HTTP."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from src.engines.parsing import parse_complete_response
from src.engines.prompts import build_system_prompt, build_user_prompt
from src.processing.classifier import classify_content
from src.processing.errors import ServiceUnavailable
from src.processing.models import ProcessingResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OllamaConfig:
    server_url: str = "http://localhost"
    port: int = 11434
    model: str = "llama2:7b"
    temperature: float = 0.1
    max_tokens: int = 2048
    context_tokens: int = 4096
    timeout_seconds: float = 120.0
    enabled: bool = False

    @property
    def base_url(self) -> str:
        return f"{self.server_url.rstrip('/')}:{self.port}"


class LocalLLMEngine:
    """Summarize text with a model served by Ollama's ``/api/generate`` endpoint."""

    name = "Local LLM (Ollama)"

    def __init__(self, config: OllamaConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def is_available(self) -> bool:
        return self.config.enabled

    async def complete(self, text: str) -> ProcessingResult:
        if not self.is_available:
            raise ServiceUnavailable("Local LLM is disabled. Enable Ollama in settings.")

        content_type = classify_content(text)
        payload = {
            "model": self.config.model,
            "system": build_system_prompt(content_type),
            "prompt": build_user_prompt(text),
            "format": "json",
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "num_predict": self.config.max_tokens,
                "num_ctx": self.config.context_tokens,
            },
        }
        url = f"{self.config.base_url}/api/generate"

        try:
            if self._client is not None:
                resp = await self._client.post(
                    url, json=payload, timeout=self.config.timeout_seconds
                )
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    resp = await client.post(url, json=payload)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ServiceUnavailable(f"Ollama at {self.config.base_url} timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise ServiceUnavailable(
                f"Ollama returned HTTP {exc.response.status_code} for model {self.config.model}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Ollama request failed: %s", exc)
            raise ServiceUnavailable(f"Cannot reach Ollama at {self.config.base_url}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise ServiceUnavailable(
                f"Ollama at {self.config.base_url} returned a non-JSON body"
            ) from exc
        if not isinstance(body, dict):
            raise ServiceUnavailable(
                f"Ollama at {self.config.base_url} returned an unexpected body"
            )

        raw = body.get("response", "")
        return parse_complete_response(raw, content_type, service=self.name)
