"""Word-set Jaccard similarity and near-duplicate filtering."""

from __future__ import annotations

import string
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")

DEFAULT_SIMILARITY_THRESHOLD = 0.8

# Articles carry no meaning for duplicate detection ("call the dentist" == "call dentist").
_IGNORED_WORDS = frozenset({"a", "an", "the"})


def word_set(text: str) -> frozenset[str]:
    """Lowercase, whitespace-tokenize and strip surrounding punctuation.

    This deliberately goes further than plain whitespace tokens: stripping
    punctuation and dropping articles lets near-identical phrasings such as
    "Call the dentist tomorrow" and "Call dentist tomorrow" collide, where
    raw tokens would score them at 0.75 and keep both.
    """
    tokens = (token.strip(string.punctuation) for token in text.lower().split())
    return frozenset(t for t in tokens if t and t not in _IGNORED_WORDS)


def jaccard_similarity(text1: str, text2: str) -> float:
    """Return |intersection| / |union| of the two word sets (0.0 when both are empty)."""
    return _set_similarity(word_set(text1), word_set(text2))


def _text_of(item: Any) -> str:
    return item.text


def dedupe(
    items: Iterable[T],
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    key: Callable[[T], str] = _text_of,
) -> list[T]:
    """Drop near-duplicates, keeping the first occurrence of each.

    An item is a duplicate when its similarity to any already-accepted item is
    strictly greater than *similarity_threshold*.

    Args:
        items: Items in priority order (first seen wins).
        similarity_threshold: Jaccard similarity above which items collide.
        key: Extracts the comparison text; defaults to ``item.text``.

    Returns:
        Accepted items in their original order.
    """
    accepted: list[T] = []
    accepted_words: list[frozenset[str]] = []

    for item in items:
        words = word_set(key(item))
        is_duplicate = any(
            _set_similarity(words, existing) > similarity_threshold
            for existing in accepted_words
        )
        if not is_duplicate:
            accepted.append(item)
            accepted_words.append(words)

    return accepted


def _set_similarity(words1: frozenset[str], words2: frozenset[str]) -> float:
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)
