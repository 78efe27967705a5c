"""Summarize a transcript file and print its summary, tasks and reminders."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import get_settings
from src.engines.factory import build_engine
from src.pipeline_config import EngineKind, PipelineConfig, SummaryPolicy
from src.processing.errors import SummarizationError
from src.processing.models import ProcessingResult
from src.processing.pipeline import summarize_transcript


def print_result(result: ProcessingResult) -> None:
    print(f"Content type: {result.content_type.description}")
    print(f"\nSummary:\n{result.summary}")

    print(f"\nTasks ({len(result.tasks)}):")
    for task in result.tasks:
        print(f"  - [{task.priority}] {task.display_text} ({task.category})")

    print(f"\nReminders ({len(result.reminders)}):")
    for reminder in result.reminders:
        print(f"  - [{reminder.urgency}] {reminder.display_text}")


def run(
    path: str,
    engine_kind: str | None = None,
    chunk_words: int | None = None,
    policy: str = SummaryPolicy.CONCATENATE.value,
) -> int:
    """Summarize the transcript at *path*. Returns a process exit code."""
    transcript_path = Path(path)
    if not transcript_path.exists():
        print(f"Transcript {path} not found.")
        return 1

    text = transcript_path.read_text(encoding="utf-8")
    settings = get_settings()
    engine = build_engine(engine_kind or settings.default_engine, settings)

    overrides: dict[str, object] = {"summary_policy": SummaryPolicy(policy)}
    if chunk_words is not None:
        overrides["max_words_per_chunk"] = chunk_words
    config = PipelineConfig.from_settings(settings, **overrides)

    print(f"Summarizing {transcript_path.name} with {engine.name}...")

    def on_progress(fraction: float) -> None:
        print(f"  {fraction:.0%}", file=sys.stderr)

    try:
        result = asyncio.run(summarize_transcript(text, engine, config, on_progress=on_progress))
    except SummarizationError as e:
        print(f"ERROR: {e.reason}")
        print(e.recovery_suggestion)
        return 1

    print_result(result)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("file")
    parser.add_argument("--engine", choices=[k.value for k in EngineKind], default=None)
    parser.add_argument("--chunk-words", type=int, default=None)
    parser.add_argument(
        "--policy",
        choices=[p.value for p in SummaryPolicy],
        default=SummaryPolicy.CONCATENATE.value,
    )
    args = parser.parse_args()
    logging.basicConfig(level=get_settings().log_level.upper())
    sys.exit(run(args.file, args.engine, args.chunk_words, args.policy))
