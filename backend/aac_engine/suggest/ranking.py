"""Candidate merging, scoring and similarity-aware truncation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from aac_engine.language.text import analyze_structure
from aac_engine.models.suggestions import TYPE_PRIORITY, Suggestion, SuggestionType
from aac_engine.suggest.similarity import are_similar

MULTI_SOURCE_BONUS = 0.1
FREQUENCY_WEIGHT = 0.05
FREQUENCY_CAP = 0.3
COMPLETENESS_BONUS = 0.2
TYPE_WEIGHT = 0.05

_TYPE_RANK = {t: i for i, t in enumerate(TYPE_PRIORITY)}


@dataclass
class Candidate:
    text: str
    confidence: float
    type: SuggestionType
    context: Optional[str] = None
    sources: int = 1

    @property
    def key(self) -> str:
        return self.text.strip().lower()

    @property
    def type_rank(self) -> int:
        return _TYPE_RANK[self.type]


@dataclass
class ScoredCandidate:
    candidate: Candidate
    score: float

    def to_suggestion(self) -> Suggestion:
        c = self.candidate
        return Suggestion(text=c.text, confidence=c.confidence, type=c.type, context=c.context)


def merge_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Collapse candidates with the same text, keeping first-seen order.

    The merged candidate takes the highest confidence plus a small bonus
    per additional source, and the highest-priority type.
    """
    merged: dict[str, Candidate] = {}
    for candidate in candidates:
        key = candidate.key
        if not key:
            continue
        current = merged.get(key)
        if current is None:
            merged[key] = Candidate(
                candidate.text, min(1.0, max(0.0, candidate.confidence)), candidate.type, candidate.context
            )
            continue
        current.sources += 1
        current.confidence = min(
            1.0, max(current.confidence, candidate.confidence) + MULTI_SOURCE_BONUS
        )
        if candidate.type_rank < current.type_rank:
            current.type = candidate.type
            current.context = candidate.context
    return list(merged.values())


def type_bonus(suggestion_type: SuggestionType) -> float:
    return (len(TYPE_PRIORITY) - _TYPE_RANK[suggestion_type]) * TYPE_WEIGHT


def score(candidate: Candidate, tokens: list[str], frequency: Callable[[str], int]) -> float:
    value = candidate.confidence
    value += min(FREQUENCY_CAP, frequency(candidate.key) * FREQUENCY_WEIGHT)
    if analyze_structure(tokens + candidate.key.split()).is_complete:
        value += COMPLETENESS_BONUS
    return value + type_bonus(candidate.type)


def rank(
    candidates: Iterable[Candidate],
    tokens: list[str],
    frequency: Callable[[str], int] = lambda word: 0,
) -> list[ScoredCandidate]:
    """Order by score, then type priority; remaining ties keep gathering order."""
    scored = [ScoredCandidate(c, score(c, tokens, frequency)) for c in candidates]
    scored.sort(key=lambda s: (-round(s.score, 9), s.candidate.type_rank))
    return scored


def select(ranked: Iterable[ScoredCandidate], limit: int) -> list[ScoredCandidate]:
    """Take candidates in order, skipping any similar to one already taken."""
    kept: list[ScoredCandidate] = []
    if limit <= 0:
        return kept
    for item in ranked:
        if any(are_similar(item.candidate.key, k.candidate.key) for k in kept):
            continue
        kept.append(item)
        if len(kept) >= limit:
            break
    return kept
