"""Inflection and lemmatisation helpers for single words.

Everything here is a pure function of its input and the tables in
``aac_engine.data.lexicon``.  Unknown words fall through the regular
suffix rules; nothing in this module raises on odd input.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable

from aac_engine.data.lexicon import (
    ADJECTIVE_SUFFIXES,
    COMMON_VERBS,
    FUTURE_MARKERS,
    IRREGULAR_ADJECTIVES,
    IRREGULAR_NOUNS,
    IRREGULAR_VERBS,
    NOUN_SUFFIXES,
    PAST_MARKERS,
    PRESENT_MARKERS,
    STRUCTURAL_VERBS,
    THIRD_PERSON_SINGULAR,
    UNINFLECTED_WORDS,
    VERB_SUFFIXES,
)

_VOWELS = frozenset("aeiou")
_VOWEL_GROUPS = re.compile(r"[aeiou]+")
_SIBILANT_ENDINGS = ("s", "sh", "ch", "x", "z")

# Reverse indexes built once from the irregular tables.
_VERB_FORM_TO_BASE: dict[str, str] = {}
for _base, _forms in IRREGULAR_VERBS.items():
    for _form in _forms:
        _VERB_FORM_TO_BASE.setdefault(_form, _base)
_PLURAL_TO_SINGULAR = {plural: single for single, plural in IRREGULAR_NOUNS.items()}
_IRREGULAR_PAST = frozenset(forms[0] for forms in IRREGULAR_VERBS.values())


class Tense(str, Enum):
    """Coarse tense of an utterance."""

    PAST = "past"
    PRESENT = "present"
    FUTURE = "future"
    UNKNOWN = "unknown"


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _is_vowel(char: str) -> bool:
    return char.lower() in _VOWELS


def _should_double(word: str) -> bool:
    """Consonant-vowel-consonant ending whose last letter is not w/x/y."""
    if len(word) < 3:
        return False
    last, second, third = word[-1], word[-2], word[-3]
    return (
        not _is_vowel(last)
        and _is_vowel(second)
        and not _is_vowel(third)
        and last not in "wxy"
    )


def _single_syllable(word: str) -> bool:
    return len(_VOWEL_GROUPS.findall(word)) <= 1


def _consonant_y(word: str) -> bool:
    return len(word) >= 2 and word.endswith("y") and not _is_vowel(word[-2])


def _third_person(verb: str) -> str:
    if verb in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[verb][2]
    if _consonant_y(verb):
        return verb[:-1] + "ies"
    if verb.endswith(_SIBILANT_ENDINGS) or verb.endswith("o"):
        return verb + "es"
    return verb + "s"


def _past(verb: str) -> str:
    if verb in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[verb][0]
    if verb.endswith("e"):
        return verb + "d"
    if _consonant_y(verb):
        return verb[:-1] + "ied"
    if _should_double(verb):
        return verb + verb[-1] + "ed"
    return verb + "ed"


def _continuous(verb: str) -> str:
    if verb in IRREGULAR_VERBS:
        return IRREGULAR_VERBS[verb][3]
    if verb.endswith("ie"):
        return verb[:-2] + "ying"
    if verb.endswith("e") and not verb.endswith(("ee", "ye", "oe")):
        return verb[:-1] + "ing"
    if _should_double(verb):
        return verb + verb[-1] + "ing"
    return verb + "ing"


def _restore_stem(stem: str) -> str:
    """Undo consonant doubling or a dropped final ``e`` after stripping a suffix."""
    if len(stem) >= 3 and stem[-1] == stem[-2] and stem[-1] not in "lsz":
        return stem[:-1]
    if len(stem) < 3:
        return stem + "e"
    if len(stem) == 3 and _should_double(stem) and stem[-1] not in "lsz":
        return stem + "e"
    return stem


# ------------------------------------------------------------------
# Variations
# ------------------------------------------------------------------


def verb_variations(verb: str) -> list[str]:
    """Third person, past, participle, continuous and modal forms of ``verb``."""
    verb = verb.lower()
    if not verb:
        return []
    if verb in IRREGULAR_VERBS:
        past, participle, third, continuous = IRREGULAR_VERBS[verb]
        return [past, participle, third, continuous, f"will {verb}"]

    continuous = _continuous(verb)
    return [
        _third_person(verb),
        _past(verb),
        continuous,
        f"will {verb}",
        f"was {continuous}",
    ]


def noun_variations(noun: str) -> list[str]:
    """Plural and possessive forms of ``noun``."""
    noun = noun.lower()
    if not noun:
        return []
    if noun in IRREGULAR_NOUNS:
        plural = IRREGULAR_NOUNS[noun]
    elif noun.endswith(_SIBILANT_ENDINGS):
        plural = noun + "es"
    elif _consonant_y(noun):
        plural = noun[:-1] + "ies"
    elif noun.endswith("fe"):
        plural = noun[:-2] + "ves"
    elif noun.endswith("f"):
        plural = noun[:-1] + "ves"
    elif len(noun) >= 2 and noun.endswith("o") and not _is_vowel(noun[-2]):
        plural = noun + "es"
    else:
        plural = noun + "s"

    possessive_plural = plural + "'" if plural.endswith("s") else plural + "'s"
    return [plural, noun + "'s", possessive_plural]


def adjective_variations(adjective: str) -> list[str]:
    """Comparative and superlative forms of ``adjective``."""
    adjective = adjective.lower()
    if not adjective:
        return []
    if adjective in IRREGULAR_ADJECTIVES:
        return list(IRREGULAR_ADJECTIVES[adjective])

    if not _single_syllable(adjective):
        if adjective.endswith("y") and _consonant_y(adjective):
            stem = adjective[:-1]
            return [stem + "ier", stem + "iest"]
        return [f"more {adjective}", f"most {adjective}"]
    if adjective.endswith("e"):
        return [adjective + "r", adjective + "st"]
    if _consonant_y(adjective):
        return [adjective[:-1] + "ier", adjective[:-1] + "iest"]
    if _should_double(adjective):
        last = adjective[-1]
        return [adjective + last + "er", adjective + last + "est"]
    return [adjective + "er", adjective + "est"]


def variations(word: str) -> set[str]:
    """Every inflected form the rules can derive for ``word``, excluding itself."""
    lower = (word or "").strip().lower()
    if not lower:
        return set()
    forms: set[str] = set()
    forms.update(verb_variations(lower))
    forms.update(noun_variations(lower))
    forms.update(adjective_variations(lower))
    forms.discard(lower)
    return forms


# ------------------------------------------------------------------
# Word classes and lemmas
# ------------------------------------------------------------------


def is_likely_verb(word: str) -> bool:
    lower = (word or "").lower()
    if lower in IRREGULAR_VERBS or lower in COMMON_VERBS:
        return True
    return lower.endswith(VERB_SUFFIXES)


def is_likely_noun(word: str) -> bool:
    lower = (word or "").lower()
    if lower in IRREGULAR_NOUNS or lower in _PLURAL_TO_SINGULAR:
        return True
    return lower.endswith(NOUN_SUFFIXES)


def is_likely_adjective(word: str) -> bool:
    lower = (word or "").lower()
    if lower in IRREGULAR_ADJECTIVES:
        return True
    return lower.endswith(ADJECTIVE_SUFFIXES)


def base_form(word: str) -> str:
    """Lemmatise ``word``.

    Irregular verb forms win over irregular noun plurals, so ``leaves``
    resolves to ``leave`` rather than ``leaf``.
    """
    lower = (word or "").strip().lower()
    if not lower:
        return ""
    if lower in _VERB_FORM_TO_BASE:
        return _VERB_FORM_TO_BASE[lower]
    if lower in _PLURAL_TO_SINGULAR:
        return _PLURAL_TO_SINGULAR[lower]
    if (
        lower in UNINFLECTED_WORDS
        or lower in IRREGULAR_VERBS
        or lower in COMMON_VERBS
        or lower in IRREGULAR_NOUNS
    ):
        return lower

    if lower.endswith("ing") and len(lower) > 4:
        return _restore_stem(lower[:-3])
    if lower.endswith("ied") and len(lower) > 4:
        return lower[:-3] + "y"
    if lower.endswith("ed") and len(lower) > 3 and not lower.endswith("eed"):
        return _restore_stem(lower[:-2])
    if lower.endswith("s") and len(lower) > 2 and not lower.endswith(("ss", "us", "is")):
        if lower.endswith("ies") and len(lower) > 4:
            return lower[:-3] + "y"
        if lower.endswith("es") and lower[:-2].endswith(_SIBILANT_ENDINGS + ("o",)):
            return lower[:-2]
        return lower[:-1]
    return lower


# ------------------------------------------------------------------
# Tense
# ------------------------------------------------------------------


def detect_tense(words: Iterable[str] | None) -> Tense:
    """Classify the tense of an utterance from temporal and auxiliary cues."""
    lowered = [w.lower() for w in (words or []) if w]
    if not lowered:
        return Tense.UNKNOWN
    tokens = set(lowered)

    if tokens & FUTURE_MARKERS:
        return Tense.FUTURE
    if tokens & PAST_MARKERS:
        return Tense.PAST
    if tokens & PRESENT_MARKERS:
        return Tense.PRESENT
    for token in lowered:
        if token in _IRREGULAR_PAST:
            return Tense.PAST
        if token.endswith("ed") and len(token) > 3 and token not in UNINFLECTED_WORDS:
            return Tense.PAST
    if any(t in STRUCTURAL_VERBS or is_likely_verb(t) for t in lowered):
        return Tense.PRESENT
    return Tense.UNKNOWN


def verb_form_for_context(verb: str, tense: Tense | str, subject: str | None = None) -> str:
    """Inflect ``verb`` for ``tense``, agreeing with ``subject`` in the present."""
    base = base_form(verb)
    tense = Tense(tense)
    if not base:
        return ""
    if tense == Tense.FUTURE:
        return f"will {base}"
    if tense == Tense.PAST:
        return _past(base)
    if subject and subject.lower() in THIRD_PERSON_SINGULAR:
        return _third_person(base)
    return base


def verb_form(verb: str, tense: Tense | str) -> str:
    """Context-free inflection; present tense yields the base form."""
    return verb_form_for_context(verb, tense)


def third_person_form(verb: str) -> str:
    return _third_person(base_form(verb))
