"""Orthographic and semantic similarity used to deduplicate suggestions."""

from __future__ import annotations

from typing import Iterable

from nltk.metrics import edit_distance

from aac_engine.data.semantics import SEMANTIC_CATEGORIES, SYNONYMS
from aac_engine.language.text import normalize
from aac_engine.language.variations import base_form

AFFIXES = ("s", "es", "ing", "ed", "er", "ly")
MAX_EDIT_DISTANCE = 2
MAX_LENGTH_DIFFERENCE = 2


def semantic_categories(word: str) -> set[str]:
    return {name for name, members in SEMANTIC_CATEGORIES.items() if word in members}


def _affix_variant(a: str, b: str) -> bool:
    shorter, longer = sorted((a, b), key=len)
    return bool(shorter) and any(longer == shorter + affix for affix in AFFIXES)


def are_similar(a: str, b: str) -> bool:
    """True when ``a`` and ``b`` should not both be shown.

    >>> are_similar("happy", "sad")
    True
    >>> are_similar("water", "play")
    False
    """
    a, b = a.strip().lower(), b.strip().lower()
    if a == b:
        return True
    if " " not in a and " " not in b:
        if base_form(a) == base_form(b):
            return True
        if _affix_variant(a, b):
            return True
    if (
        abs(len(a) - len(b)) <= MAX_LENGTH_DIFFERENCE
        and edit_distance(a, b) <= MAX_EDIT_DISTANCE
    ):
        return True
    return bool(semantic_categories(a) & semantic_categories(b))


def synonyms(word: str, vocabulary: Iterable[str] | None = None) -> list[str]:
    """Direct and reverse synonyms of ``word``, optionally limited to ``vocabulary``."""
    word = word.strip().lower()
    found = list(SYNONYMS.get(word, ()))
    for head, alternatives in SYNONYMS.items():
        if word in alternatives and head not in found:
            found.append(head)
    found = [s for s in found if s != word]
    if vocabulary is not None:
        allowed = set(normalize(vocabulary))
        found = [s for s in found if s in allowed]
    return found


def category_members(word: str, vocabulary: Iterable[str] | None) -> list[str]:
    """Words from ``vocabulary`` that share a semantic category with ``word``."""
    categories = semantic_categories(word.strip().lower())
    if not categories:
        return []
    members = []
    for candidate in normalize(vocabulary):
        if candidate != word and candidate not in members and semantic_categories(candidate) & categories:
            members.append(candidate)
    return members
