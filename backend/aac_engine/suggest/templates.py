"""Lookups against the static template bank, category vocabularies and sentence list.

Everything here is a pure function of its arguments and the tables in
``aac_engine.data``.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from aac_engine.data.sentences import (
    SENTENCE_CONNECTORS,
    SENTENCES,
    STARTER_PRIORITY_THRESHOLD,
    TIER_BONUS,
)
from aac_engine.data.templates import (
    CATEGORY_CONNECTORS,
    CATEGORY_CONTEXT_BOOSTS,
    CATEGORY_KEYWORDS,
    CONNECTING_WORDS,
    FIRST_WORD_BOOSTS,
    INITIAL_WORDS,
    LAST_WORD_BOOSTS,
    SENTENCE_TEMPLATES,
)
from aac_engine.language.text import normalize

_MAX_PATTERN = max(len(key) for key in SENTENCE_TEMPLATES)

CATEGORY_BASE_SCORE = 10
CATEGORY_CONTEXT_BONUS = 8
CATEGORY_CONNECTOR_BONUS = 5
LAST_WORD_BONUS = 6
FIRST_WORD_BONUS = 7


class TemplateMatch(NamedTuple):
    text: str
    pattern_length: int
    rank: int


class SentenceMatch(NamedTuple):
    text: str
    score: int
    is_prefix: bool


def _contains(tokens: list[str], phrase: str) -> bool:
    needle = phrase.split()
    width = len(needle)
    return any(tokens[i : i + width] == needle for i in range(len(tokens) - width + 1))


# ------------------------------------------------------------------
# Sentence templates
# ------------------------------------------------------------------


def template_completions(words: Iterable[str] | None, limit: int | None = None) -> list[TemplateMatch]:
    """Completions for the longest matching tail of ``words``, then shorter tails.

    When ``words`` is a strict prefix of a template key, the next word of
    that key is offered as well.
    """
    tokens = normalize(words)
    if not tokens:
        return []
    found: list[TemplateMatch] = []
    seen: set[str] = set()

    for length in range(min(len(tokens), _MAX_PATTERN), 0, -1):
        completions = SENTENCE_TEMPLATES.get(tuple(tokens[-length:]), ())
        for rank, completion in enumerate(completions):
            if completion not in seen:
                seen.add(completion)
                found.append(TemplateMatch(completion, length, rank))

    for key in SENTENCE_TEMPLATES:
        if len(key) > len(tokens) and key[: len(tokens)] == tuple(tokens):
            nxt = key[len(tokens)]
            if nxt not in seen:
                seen.add(nxt)
                found.append(TemplateMatch(nxt, len(tokens), len(found)))

    return found[:limit] if limit is not None else found


# ------------------------------------------------------------------
# Category vocabulary
# ------------------------------------------------------------------


def category_score(word: str, tokens: list[str]) -> int:
    """Contextual score of a category word given the current utterance."""
    score = CATEGORY_BASE_SCORE
    if not tokens:
        return score
    for phrases, boosted in CATEGORY_CONTEXT_BOOSTS:
        if word in boosted and any(_contains(tokens, phrase) for phrase in phrases):
            score += CATEGORY_CONTEXT_BONUS
    if word in CATEGORY_CONNECTORS:
        score += CATEGORY_CONNECTOR_BONUS
    if word in LAST_WORD_BOOSTS.get(tokens[-1], ()):
        score += LAST_WORD_BONUS
    if word in FIRST_WORD_BOOSTS.get(tokens[0], ()):
        score += FIRST_WORD_BONUS
    return score


def category_relevant_words(
    words: Iterable[str] | None,
    category: str | None,
    vocabulary: Iterable[str] | None,
    limit: int = 8,
) -> list[tuple[str, int]]:
    """Caller vocabulary that belongs to ``category``, best contextual fit first.

    Unknown categories accept every supplied word, since the caller's
    category vocabulary already names its members.
    """
    if not category:
        return []
    keywords = CATEGORY_KEYWORDS.get(category.strip().lower())
    tokens = normalize(words)
    scored: dict[str, int] = {}
    for word in normalize(vocabulary):
        if keywords is not None and word not in keywords:
            continue
        scored[word] = category_score(word, tokens)
    ranked = sorted(scored.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


# ------------------------------------------------------------------
# Starters and connecting words
# ------------------------------------------------------------------


def initial_words(limit: int = 10) -> list[tuple[str, int]]:
    ranked = sorted(INITIAL_WORDS, key=lambda entry: -entry[1])
    return [(word, priority) for word, priority, _ in ranked[:limit]]


def connecting_words(words: Iterable[str] | None, limit: int = 5) -> list[tuple[str, int]]:
    """Connecting words ranked for the current utterance."""
    tokens = normalize(words)
    last = tokens[-1] if tokens else ""
    ranked = []
    for word, priority, contexts in CONNECTING_WORDS:
        if contexts and any(token in contexts for token in tokens):
            priority += 50
        if last and last in contexts:
            priority += 100
        ranked.append((word, priority))
    ranked.sort(key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


# ------------------------------------------------------------------
# Canonical sentences
# ------------------------------------------------------------------


def starter_sentences(limit: int = 5) -> list[str]:
    top = [s for s in SENTENCES if s.priority >= STARTER_PRIORITY_THRESHOLD]
    top.sort(key=lambda s: -s.priority)
    return [s.text for s in top[:limit]]


def sentence_score(sentence_text: str, context: str, tier: str, priority: int, tokens: list[str]) -> int:
    lowered = sentence_text.lower()
    sentence_tokens = lowered.split()
    score = priority * 2 + TIER_BONUS.get(tier, 0)
    if sentence_tokens[: len(tokens)] == tokens:
        score += 150
    for token in tokens:
        if token in sentence_tokens:
            score += 30
        if token in context.lower().split():
            score += 15
    if any(t in SENTENCE_CONNECTORS for t in tokens) and any(t in SENTENCE_CONNECTORS for t in sentence_tokens):
        score += 25
    return score


def find_sentences(words: Iterable[str] | None, limit: int = 3) -> list[SentenceMatch]:
    """Canonical sentences that extend or overlap the current utterance."""
    tokens = normalize(words)
    if not tokens:
        return [SentenceMatch(text, 0, False) for text in starter_sentences(limit)]
    prefix = " ".join(tokens)
    matches = []
    for sentence in SENTENCES:
        lowered = sentence.text.lower()
        sentence_tokens = lowered.split()
        is_prefix = len(sentence_tokens) > len(tokens) and sentence_tokens[: len(tokens)] == tokens
        if not is_prefix and not any(t in sentence_tokens for t in tokens):
            continue
        if lowered == prefix:
            continue
        score = sentence_score(sentence.text, sentence.context, sentence.tier, sentence.priority, tokens)
        matches.append(SentenceMatch(sentence.text, score, is_prefix))
    matches.sort(key=lambda m: (-m.score, m.text))
    return matches[:limit]
