"""Tokenisation and a lightweight structural check for utterances."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from aac_engine.data.lexicon import STRUCTURAL_SUBJECTS, STRUCTURAL_VERBS
from aac_engine.data.semantics import TOPIC_TAXONOMY

_TOKEN_RE = re.compile(r"[a-z0-9']+")


def tokenize(text: str | Iterable[str] | None) -> list[str]:
    """Lower-case word tokens; apostrophes inside words are kept (``i'm``)."""
    if text is None:
        return []
    if not isinstance(text, str):
        text = " ".join(w for w in text if w)
    return [t.strip("'") for t in _TOKEN_RE.findall(text.lower()) if t.strip("'")]


def normalize(words: Iterable[str] | None) -> list[str]:
    """Lower-case, trim and drop empty entries from a caller-supplied word list."""
    if not words:
        return []
    cleaned = []
    for word in words:
        if not isinstance(word, str):
            continue
        word = word.strip().lower()
        if word:
            cleaned.append(word)
    return cleaned


def context_key(words: Iterable[str] | None) -> str:
    """Serialised preceding word sequence used to condition personalised scoring."""
    return " ".join(normalize(words))


@dataclass
class SentenceStructure:
    has_subject: bool = False
    has_verb: bool = False
    missing: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.has_subject and self.has_verb


def analyze_structure(words: Iterable[str] | None) -> SentenceStructure:
    """Check whether the utterance has a subject and a verb."""
    tokens: list[str] = []
    for word in normalize(words):
        tokens.extend(tokenize(word))
    structure = SentenceStructure()
    for token in tokens:
        if token in STRUCTURAL_SUBJECTS or token.startswith("i'"):
            structure.has_subject = True
        if (
            token in STRUCTURAL_VERBS
            or token.startswith("i'")
            or (len(token) > 4 and token.endswith(("ing", "ed")))
        ):
            structure.has_verb = True
    if not structure.has_subject:
        structure.missing.append("subject")
    if not structure.has_verb:
        structure.missing.append("verb")
    return structure


def detect_topics(words: Iterable[str] | None) -> set[str]:
    """Topic tags whose keywords appear in the utterance."""
    tokens = set(normalize(words))
    return {topic for topic, keywords in TOPIC_TAXONOMY.items() if tokens & keywords}
