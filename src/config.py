from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from src.pipeline_config import EngineKind


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # OpenAI
    enable_openai: bool = True
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_temperature: float = 0.1
    openai_max_tokens: int | None = None

    # Claude
    enable_claude: bool = True
    claude_model: str = "claude-sonnet-4-20250514"
    claude_max_tokens: int = 4096

    # Ollama (local LLM)
    enable_ollama: bool = False
    ollama_server_url: str = "http://localhost"
    ollama_port: int = 11434
    ollama_model: str = "llama2:7b"
    ollama_temperature: float = 0.1
    ollama_max_tokens: int = 2048
    ollama_context_tokens: int = 4096
    ollama_timeout_seconds: float = 120.0

    # App config
    default_engine: EngineKind = EngineKind.OPENAI
    max_context_tokens: int = 4096
    chunk_words: int = 2000
    max_retries: int = 2
    cache_max_entries: int = 50
    cache_max_bytes: int = 50 * 1024 * 1024
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
