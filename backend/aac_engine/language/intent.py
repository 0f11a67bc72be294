"""Intent classification as an ordered list of ``(predicate, label)`` rules.

The first matching rule wins, so "I want to feel happy" is a desire and
not an emotion.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from aac_engine.language.text import normalize
from aac_engine.models.patterns import IntentType

Predicate = Callable[[list[str], str], bool]

DESIRE_PHRASES = ("i want", "i need", "i would like", "i'd like", "can i have", "can i get")
EMOTION_PHRASES = ("i feel", "i am", "i'm", "i love", "i hate", "i'm happy", "i'm sad")
QUESTION_STARTERS = frozenset({"what", "where", "when", "who", "why", "how", "which"})
QUESTION_PHRASES = ("can you", "could you", "would you", "will you", "is it", "are you", "do you")
REQUEST_PHRASES = ("please", "help me", "can you help", "i need help", "let me")
GREETING_PHRASES = ("hello", "hi", "hey", "good morning", "good afternoon", "good night", "g'day", "bye", "goodbye")
THANKS_PHRASES = ("thank", "thanks", "thank you", "cheers", "ta")


def _phrase_pattern(phrases: Iterable[str]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(p) for p in sorted(phrases, key=len, reverse=True))
    return re.compile(rf"(?<![\w'])(?:{alternatives})(?![\w'])")


def contains_phrase(phrases: Iterable[str]) -> Predicate:
    pattern = _phrase_pattern(phrases)
    return lambda words, sentence: pattern.search(sentence) is not None


def starts_with(first_words: frozenset[str]) -> Predicate:
    return lambda words, sentence: bool(words) and words[0] in first_words


def any_of(*predicates: Predicate) -> Predicate:
    return lambda words, sentence: any(p(words, sentence) for p in predicates)


INTENT_RULES: tuple[tuple[Predicate, IntentType], ...] = (
    (contains_phrase(DESIRE_PHRASES), IntentType.DESIRE),
    (contains_phrase(EMOTION_PHRASES), IntentType.EMOTION),
    (any_of(starts_with(QUESTION_STARTERS), contains_phrase(QUESTION_PHRASES)), IntentType.QUESTION),
    (contains_phrase(REQUEST_PHRASES), IntentType.REQUEST),
    (contains_phrase(GREETING_PHRASES), IntentType.GREETING),
    (contains_phrase(THANKS_PHRASES), IntentType.THANKS),
)


def classify(words: Iterable[str] | str | None) -> IntentType:
    """Label an utterance; anything unmatched is a statement."""
    if isinstance(words, str):
        words = words.split()
    tokens = normalize(words)
    sentence = " ".join(tokens)
    for predicate, label in INTENT_RULES:
        if predicate(tokens, sentence):
            return label
    return IntentType.STATEMENT
