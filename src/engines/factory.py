"""Build summarization engines from application settings."""

from __future__ import annotations

import logging

from src.config import Settings
from src.engines.base import SummarizationEngine
from src.engines.claude import ClaudeEngine, ClaudeEngineConfig
from src.engines.ollama import LocalLLMEngine, OllamaConfig
from src.engines.openai_engine import OpenAIEngine, OpenAIEngineConfig
from src.engines.unavailable import UnavailableEngine
from src.pipeline_config import EngineKind

logger = logging.getLogger(__name__)

_UNSUPPORTED: dict[EngineKind, tuple[str, str]] = {
    EngineKind.AWS_BEDROCK: ("AWS Bedrock", "AWS Bedrock integration is not available yet"),
    EngineKind.WHISPER: ("Whisper", "Whisper is a transcription engine and cannot summarize"),
}


def build_engine(kind: EngineKind | str, settings: Settings) -> SummarizationEngine:
    """Return the engine for *kind*, or an UnavailableEngine explaining why not.

    Args:
        kind: Engine identifier.
        settings: Application settings holding credentials and model options.

    Raises:
        ValueError: If *kind* is not a known engine identifier.
    """
    kind = EngineKind(kind)

    if kind in _UNSUPPORTED:
        name, reason = _UNSUPPORTED[kind]
        return UnavailableEngine(name, reason)

    if kind == EngineKind.OPENAI:
        openai_config = OpenAIEngineConfig(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            enabled=settings.enable_openai,
        )
        if not settings.enable_openai:
            return UnavailableEngine(OpenAIEngine.name, "OpenAI is disabled in settings")
        if not openai_config.is_configured:
            return UnavailableEngine(OpenAIEngine.name, "OpenAI API key is missing or invalid")
        return OpenAIEngine(openai_config)

    if kind == EngineKind.CLAUDE:
        if not settings.enable_claude:
            return UnavailableEngine(ClaudeEngine.name, "Claude is disabled in settings")
        if not settings.anthropic_api_key:
            return UnavailableEngine(ClaudeEngine.name, "Anthropic API key is missing")
        return ClaudeEngine(
            ClaudeEngineConfig(
                api_key=settings.anthropic_api_key,
                model=settings.claude_model,
                max_tokens=settings.claude_max_tokens,
            )
        )

    # EngineKind.LOCAL_LLM
    if not settings.enable_ollama:
        return UnavailableEngine(LocalLLMEngine.name, "Ollama is disabled in settings")
    logger.debug("Using Ollama at %s:%d", settings.ollama_server_url, settings.ollama_port)
    return LocalLLMEngine(
        OllamaConfig(
            server_url=settings.ollama_server_url,
            port=settings.ollama_port,
            model=settings.ollama_model,
            temperature=settings.ollama_temperature,
            max_tokens=settings.ollama_max_tokens,
            context_tokens=settings.ollama_context_tokens,
            timeout_seconds=settings.ollama_timeout_seconds,
            enabled=True,
        )
    )
