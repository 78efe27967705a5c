"""Pipeline configuration: strategy enums and the PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.config import Settings


class SummaryPolicy(str, Enum):
    """How per-chunk summaries are merged into the final summary."""

    CONCATENATE = "concatenate"
    DEDUPLICATE = "deduplicate"


class EngineKind(str, Enum):
    """Available summarization engines."""

    OPENAI = "openai"
    CLAUDE = "claude"
    LOCAL_LLM = "local_llm"
    AWS_BEDROCK = "aws_bedrock"
    WHISPER = "whisper"


@dataclass(frozen=True)
class ClassifierConfig:
    """Thresholds for heuristic content classification.

    A category score is its raw weighted sum divided by the category's
    normalizer, clamped to 1.0. The best score must exceed
    ``general_threshold`` to beat the ``general`` fallback.
    """

    general_threshold: float = 0.3
    meeting_normalizer: float = 10.0
    journal_normalizer: float = 15.0
    technical_normalizer: float = 10.0


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for one summarization run.

    Defaults give a 4096-token context budget, 2000-word chunks, two retries
    per chunk and at most 15 tasks and 15 reminders in the final result.
    """

    max_context_tokens: int = 4096
    max_words_per_chunk: int = 2000
    max_retries: int = 2
    max_tasks: int = 15
    max_reminders: int = 15
    similarity_threshold: float = 0.8
    summary_policy: SummaryPolicy = SummaryPolicy.CONCATENATE
    max_summary_sentences: int = 5
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> PipelineConfig:
        """Build a config from environment-backed settings plus explicit overrides."""
        values: dict[str, object] = {
            "max_context_tokens": settings.max_context_tokens,
            "max_words_per_chunk": settings.chunk_words,
            "max_retries": settings.max_retries,
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
