"""Token estimation and sentence-aligned chunking for long transcripts."""

from __future__ import annotations

import math
import re

from src.processing.errors import InvalidInput
from src.processing.models import Chunk

_SENTENCE_BOUNDARY = re.compile(r"[.!?]")

# Rough average for English text across common tokenizers.
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough token estimate: one token per ``CHARS_PER_TOKEN`` characters.

    Deterministic and monotonic in text length. Empty text is 0 tokens.
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def needs_chunking(text: str, model_budget: int) -> bool:
    """Return True when *text* is estimated to exceed *model_budget* tokens."""
    return estimate_tokens(text) > model_budget


def split_sentences(text: str) -> list[str]:
    """Split on terminal punctuation, dropping empty or whitespace-only fragments."""
    fragments = (f.strip() for f in _SENTENCE_BOUNDARY.split(text))
    return [f for f in fragments if f]


def chunk_text(text: str, max_words_per_chunk: int = 2000) -> list[Chunk]:
    """Greedily pack whole sentences into chunks of at most *max_words_per_chunk* words.

    A sentence longer than the limit is never split; it becomes a chunk of its
    own. Each chunk's text is its sentences joined by ``". "`` with a trailing
    period.

    Args:
        text: Raw transcript text.
        max_words_per_chunk: Word budget per chunk.

    Returns:
        List of :class:`Chunk` instances in source order.

    Raises:
        InvalidInput: If *text* contains no sentence.
    """
    if max_words_per_chunk < 1:
        raise ValueError(f"max_words_per_chunk must be positive, got {max_words_per_chunk}")

    sentences = split_sentences(text)
    if not sentences:
        raise InvalidInput("Transcript contains no sentences to process")

    groups: list[list[str]] = []
    current: list[str] = []
    current_words = 0

    for sentence in sentences:
        words = len(sentence.split())
        if current and current_words + words > max_words_per_chunk:
            groups.append(current)
            current = [sentence]
            current_words = words
        else:
            current.append(sentence)
            current_words += words

    if current:
        groups.append(current)

    return [
        Chunk(index=idx, text=". ".join(group) + ".")
        for idx, group in enumerate(groups)
    ]
