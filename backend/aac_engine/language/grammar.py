"""Rule-based detection of structurally incomplete utterances.

Rules run in a fixed order.  Each rule fires at most once per pass and
claims the token positions it anchored on; later rules skip any
position already claimed.

    >>> best_correction(["he", "want"]).corrected
    'he wants'
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from aac_engine.data.grammar import (
    ABSTRACT_NOUNS,
    AGREEMENT_VERBS,
    ARTICLE_TRIGGERS,
    COPULA_FOR_SUBJECT,
    COUNTABLE_NOUNS,
    DETERMINERS,
    INFINITIVE_TRIGGERS,
    INFINITIVE_VERBS,
    NO_INFINITIVE_WORDS,
    QUESTION_AUXILIARIES,
    STATE_ADJECTIVES,
    UNIQUE_NOUNS,
)
from aac_engine.data.lexicon import PLURAL_SUBJECTS, THIRD_PERSON_SINGULAR
from aac_engine.language.variations import third_person_form
from aac_engine.models.suggestions import GrammarCheckResult, GrammaticalSuggestion

logger = logging.getLogger(__name__)

Rule = Callable[[list[str], list[str], set[int]], GrammaticalSuggestion | None]

_THIRD_PERSON_FORMS = {verb: third_person_form(verb) for verb in AGREEMENT_VERBS}
_BASE_FROM_THIRD = {third: verb for verb, third in _THIRD_PERSON_FORMS.items()}


def _claimable(consumed: set[int], *positions: int) -> bool:
    return not any(p in consumed for p in positions)


def _inverted(tokens: list[str], subject_index: int) -> bool:
    """True when an auxiliary precedes the subject, as in a question."""
    return subject_index > 0 and tokens[subject_index - 1] in QUESTION_AUXILIARIES


def _suggestion(
    words: list[str],
    corrected: list[str],
    confidence: float,
    explanation: str,
    rule: str,
    position: int,
) -> GrammaticalSuggestion:
    return GrammaticalSuggestion(
        original=" ".join(words),
        corrected=" ".join(corrected),
        confidence=confidence,
        explanation=explanation,
        rule=rule,
        position=position,
    )


# ------------------------------------------------------------------
# Rules
# ------------------------------------------------------------------


def missing_copula(tokens: list[str], words: list[str], consumed: set[int]) -> GrammaticalSuggestion | None:
    """``I good`` -> ``I am good``."""
    for i in range(len(tokens) - 1):
        subject, word = tokens[i], tokens[i + 1]
        if (
            subject in COPULA_FOR_SUBJECT
            and word in STATE_ADJECTIVES
            and not _inverted(tokens, i)
            and _claimable(consumed, i, i + 1)
        ):
            copula = COPULA_FOR_SUBJECT[subject]
            consumed.update((i, i + 1))
            corrected = words[: i + 1] + [copula] + words[i + 1 :]
            return _suggestion(
                words, corrected, 0.95,
                f'Added "{copula}" between subject and adjective',
                "missing_copula", i,
            )
    return None


def missing_infinitive_to(tokens: list[str], words: list[str], consumed: set[int]) -> GrammaticalSuggestion | None:
    """``I want go`` -> ``I want to go``."""
    for i in range(len(tokens) - 1):
        trigger, verb = tokens[i], tokens[i + 1]
        if (
            trigger in INFINITIVE_TRIGGERS
            and verb in INFINITIVE_VERBS
            and verb not in NO_INFINITIVE_WORDS
            and _claimable(consumed, i, i + 1)
        ):
            consumed.update((i, i + 1))
            corrected = words[: i + 1] + ["to"] + words[i + 1 :]
            return _suggestion(
                words, corrected, 0.92,
                f'Added "to" before infinitive verb "{words[i + 1]}"',
                "missing_infinitive_to", i,
            )
    return None


def subject_verb_agreement(tokens: list[str], words: list[str], consumed: set[int]) -> GrammaticalSuggestion | None:
    """``he want`` -> ``he wants`` and ``they wants`` -> ``they want``."""
    for i in range(len(tokens) - 1):
        subject, verb = tokens[i], tokens[i + 1]
        if _inverted(tokens, i) or not _claimable(consumed, i, i + 1):
            continue
        if subject in THIRD_PERSON_SINGULAR and verb in _THIRD_PERSON_FORMS:
            replacement = _THIRD_PERSON_FORMS[verb]
            explanation = f'Changed "{words[i + 1]}" to "{replacement}" for third person singular'
        elif subject in PLURAL_SUBJECTS and verb in _BASE_FROM_THIRD:
            replacement = _BASE_FROM_THIRD[verb]
            explanation = f'Changed "{words[i + 1]}" to "{replacement}" for plural subject'
        else:
            continue
        consumed.update((i, i + 1))
        corrected = list(words)
        corrected[i + 1] = replacement
        return _suggestion(words, corrected, 0.88, explanation, "subject_verb_agreement", i)
    return None


def missing_article(tokens: list[str], words: list[str], consumed: set[int]) -> GrammaticalSuggestion | None:
    """``I want ball`` -> ``I want a ball``; unique places take ``the``."""
    for i in range(len(tokens) - 1):
        verb, noun = tokens[i], tokens[i + 1]
        if (
            verb in ARTICLE_TRIGGERS
            and noun in COUNTABLE_NOUNS
            and noun not in ABSTRACT_NOUNS
            and noun not in DETERMINERS
            and _claimable(consumed, i, i + 1)
        ):
            article = "the" if noun in UNIQUE_NOUNS else "a"
            consumed.update((i, i + 1))
            corrected = words[: i + 1] + [article] + words[i + 1 :]
            return _suggestion(
                words, corrected, 0.85,
                f'Added article "{article}" before noun "{words[i + 1]}"',
                "missing_article", i,
            )
    return None


RULES: tuple[Rule, ...] = (
    missing_copula,
    missing_infinitive_to,
    subject_verb_agreement,
    missing_article,
)


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def detect_issues(words: Iterable[str] | None) -> list[GrammaticalSuggestion]:
    """Run every rule once and return all matches, highest confidence first."""
    original = [w.strip() for w in (words or []) if isinstance(w, str) and w.strip()]
    if not original:
        return []
    tokens = [w.lower() for w in original]
    consumed: set[int] = set()
    found = []
    for rule in RULES:
        match = rule(tokens, original, consumed)
        if match is not None:
            logger.debug(f"Grammar rule {match.rule} matched at {match.position}")
            found.append(match)
    found.sort(key=lambda s: -s.confidence)
    return found


def best_correction(words: Iterable[str] | None) -> GrammaticalSuggestion | None:
    issues = detect_issues(words)
    return issues[0] if issues else None


def check(words: Iterable[str] | None) -> GrammarCheckResult:
    issues = detect_issues(words)
    return GrammarCheckResult(
        best_correction=issues[0] if issues else None,
        suggestions=issues,
    )


def needs_correction(words: Iterable[str] | None) -> bool:
    best = best_correction(words)
    return best is not None and best.confidence >= 0.85
