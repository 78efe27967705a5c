"""Heuristic content classification: meeting, personal journal, technical or general."""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.pipeline_config import ClassifierConfig
from src.processing.models import ContentType


def _phrases(*words: str) -> list[re.Pattern[str]]:
    return [re.compile(rf"\b{re.escape(w)}\b") for w in words]


_MEETING_KEYWORDS = _phrases(
    "meeting", "agenda", "action item", "follow up", "next steps",
    "discuss", "decision", "agree", "disagree", "vote", "consensus",
    "attendees", "participants", "minutes", "schedule", "calendar",
    "presentation", "slides", "demo", "review", "feedback",
    "team", "group", "everyone", "all", "we should", "let's",
    "deadline", "timeline", "milestone", "project", "task assignment",
)

_CONVERSATION_INDICATORS = _phrases(
    "said", "mentioned", "asked", "replied", "responded", "suggested",
    "john said", "mary mentioned", "bob asked", "she said", "he mentioned",
    "speaker 1", "speaker 2", "speaker 3",
)

# Only counted when a pattern matches more than once (multiple speakers).
_SPEAKER_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"speaker \d+"),
    re.compile(r"\w+ said"),
    re.compile(r"\w+ mentioned"),
    re.compile(r"\w+ asked"),
]

_JOURNAL_KEYWORDS = _phrases(
    "i feel", "i think", "i believe", "i remember", "i realized",
    "today", "yesterday", "this morning", "tonight", "this week",
    "my day", "my life", "my experience", "my thoughts", "my feelings",
    "grateful", "thankful", "blessed", "happy", "sad", "excited",
    "worried", "anxious", "peaceful", "content", "frustrated",
    "learned", "discovered", "noticed", "observed", "reflected",
)

_PERSONAL_PRONOUNS = _phrases("i", "my", "me", "myself")

_EMOTIONAL_WORDS = _phrases(
    "love", "hate", "fear", "hope", "dream", "wish", "want", "need",
    "amazing", "wonderful", "terrible", "awful", "beautiful", "peaceful",
)

_TECHNICAL_TERMS = (
    "algorithm", "function", "method", "class", "object", "variable",
    "database", "server", "client", "api", "endpoint", "request", "response",
    "code", "programming", "development", "software", "hardware",
    "system", "architecture", "framework", "library", "module",
    "bug", "error", "exception", "debug", "test", "unit test",
    "deployment", "production", "staging", "environment",
    "performance", "optimization", "scalability", "security",
)
_TECHNICAL_KEYWORDS = _phrases(*_TECHNICAL_TERMS)

_TECHNICAL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\w+\.\w+\(\)"),  # object.method()
    re.compile(r"\w+\[\d+\]"),  # array access
    re.compile(r"\bif\s+\w+"),
    re.compile(r"\bfor\s+\w+"),
    re.compile(r"\bwhile\s+\w+"),
    re.compile(r"\d+\.\d+\.\d+"),  # version numbers
    re.compile(r"https?://"),
    re.compile(r"\w+@\w+\.\w+"),  # e-mail addresses
]

_FILLER_WORDS = re.compile(r"\b(?:um|uh|like|you know)\b[,]?\s*", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ContentScores:
    """Normalized per-category scores, each within [0, 1]."""

    meeting: float
    personal_journal: float
    technical: float


def preprocess_text(text: str) -> str:
    """Trim, collapse whitespace and strip filler words."""
    normalized = _WHITESPACE.sub(" ", text.strip())
    return _FILLER_WORDS.sub("", normalized).strip()


def _count_present(patterns: list[re.Pattern[str]], text: str) -> int:
    return sum(1 for p in patterns if p.search(text))


def _meeting_score(text: str) -> float:
    score = 1.0 * _count_present(_MEETING_KEYWORDS, text)
    score += 1.5 * _count_present(_CONVERSATION_INDICATORS, text)
    for pattern in _SPEAKER_PATTERNS:
        matches = len(pattern.findall(text))
        if matches > 1:
            score += matches * 0.5
    return score


def _journal_score(text: str) -> float:
    score = 1.0 * _count_present(_JOURNAL_KEYWORDS, text)
    score += 0.3 * sum(len(p.findall(text)) for p in _PERSONAL_PRONOUNS)
    score += 0.5 * _count_present(_EMOTIONAL_WORDS, text)
    return score


def _technical_score(text: str) -> float:
    score = 1.0 * _count_present(_TECHNICAL_KEYWORDS, text)
    score += 0.5 * sum(len(p.findall(text)) for p in _TECHNICAL_PATTERNS)

    words = text.split()
    if words:
        technical_words = sum(
            1 for word in words if any(term in word for term in _TECHNICAL_TERMS)
        )
        score += technical_words / len(words) * 5.0
    return score


def _normalize(raw: float, normalizer: float) -> float:
    return max(0.0, min(1.0, raw / normalizer))


def score_content(text: str, config: ClassifierConfig | None = None) -> ContentScores:
    """Compute normalized meeting, journal and technical scores for *text*."""
    cfg = config or ClassifierConfig()
    lowered = preprocess_text(text).lower()
    return ContentScores(
        meeting=_normalize(_meeting_score(lowered), cfg.meeting_normalizer),
        personal_journal=_normalize(_journal_score(lowered), cfg.journal_normalizer),
        technical=_normalize(_technical_score(lowered), cfg.technical_normalizer),
    )


def classify_content(text: str, config: ClassifierConfig | None = None) -> ContentType:
    """Pick the best-scoring content type, falling back to ``general``.

    The best score must exceed ``config.general_threshold``. Exact ties go to
    the earlier category in the order meeting, personal journal, technical.

    Args:
        text: Transcript or chunk text.
        config: Threshold and normalizers; defaults to :class:`ClassifierConfig`.

    Returns:
        The detected :class:`ContentType`.
    """
    cfg = config or ClassifierConfig()
    scores = score_content(text, cfg)
    ranked = [
        (ContentType.MEETING, scores.meeting),
        (ContentType.PERSONAL_JOURNAL, scores.personal_journal),
        (ContentType.TECHNICAL, scores.technical),
    ]
    best_type, best_score = max(ranked, key=lambda pair: pair[1])
    if best_score > cfg.general_threshold:
        return best_type
    return ContentType.GENERAL
