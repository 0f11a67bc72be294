"""Suggestion aggregator: gathers candidates from every source and ranks them.

Static sources (templates, category vocabulary, lexical variation,
synonyms, canonical sentences) need nothing but the caller's input.
Learned sources read the session snapshots held by the pattern store,
the preference model and the intent store. If the learned sources
cannot be read in time the aggregator answers from the static sources
alone.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Iterable, Optional

from aac_engine.config import Settings, settings as default_settings
from aac_engine.data.semantics import TOPIC_TAXONOMY
from aac_engine.data.templates import CONNECTING_WORDS
from aac_engine.language.intent import classify
from aac_engine.language.text import detect_topics, normalize, tokenize
from aac_engine.language.variations import (
    Tense,
    base_form,
    detect_tense,
    is_likely_verb,
    verb_variations,
)
from aac_engine.memory.intents import IntentStore
from aac_engine.memory.patterns import PatternStore
from aac_engine.memory.preferences import AdaptivePreferenceModel
from aac_engine.memory.store import StoreUnavailableError
from aac_engine.models.suggestions import Suggestion, SuggestionType
from aac_engine.suggest import templates
from aac_engine.suggest.ranking import Candidate, merge_candidates, rank, select
from aac_engine.suggest.similarity import category_members, synonyms

logger = logging.getLogger(__name__)

_CONNECTORS = frozenset(word for word, _, _ in CONNECTING_WORDS)
_CONNECTOR_BASE = {word: priority for word, priority, _ in CONNECTING_WORDS}

TEMPORAL_WINDOW_HOURS = 2
HOUR_BONUS = 0.05


def _no_history(word: str) -> int:
    return 0


def _full_confidence(word: str) -> float:
    return 1.0


class SuggestionAggregator:
    """Merges, deduplicates and ranks candidates from all sources."""

    def __init__(
        self,
        patterns: PatternStore,
        preferences: AdaptivePreferenceModel,
        intents: IntentStore,
        settings: Settings | None = None,
    ) -> None:
        self._patterns = patterns
        self._preferences = preferences
        self._intents = intents
        self._settings = settings or default_settings

    # ------------------------------------------------------------------
    # Static sources
    # ------------------------------------------------------------------

    def _starter_candidates(self) -> list[Candidate]:
        found = [
            Candidate(word, 0.5 + priority / 400, SuggestionType.COMPLETION, "starter")
            for word, priority in templates.initial_words(10)
        ]
        found.extend(
            Candidate(text, 0.55, SuggestionType.FULL_SENTENCE, "sentence")
            for text in templates.starter_sentences(3)
        )
        return found

    def _template_candidates(self, tokens: list[str]) -> list[Candidate]:
        found = []
        for match in templates.template_completions(tokens):
            confidence = 0.85 - 0.03 * match.rank + 0.03 * (match.pattern_length - 1)
            found.append(
                Candidate(match.text, max(0.3, confidence), SuggestionType.COMPLETION, "template")
            )
        for word, priority in templates.connecting_words(tokens, limit=5):
            if priority >= _CONNECTOR_BASE[word] + 100:
                found.append(Candidate(word, 0.8, SuggestionType.COMPLETION, "grammar"))
        return found

    def _category_candidates(
        self,
        tokens: list[str],
        category: Optional[str],
        vocabulary: list[str],
    ) -> list[Candidate]:
        return [
            Candidate(
                word,
                min(0.8, 0.45 + score / 100),
                SuggestionType.CATEGORY_CONTEXTUAL,
                f"category:{category.strip().lower()}",
            )
            for word, score in templates.category_relevant_words(tokens, category, vocabulary)
        ]

    def _tense_candidates(self, tokens: list[str]) -> list[Candidate]:
        last = tokens[-1]
        if not is_likely_verb(last):
            return []
        tense = detect_tense(tokens)
        found = []
        for form in verb_variations(base_form(last)):
            if form == last:
                continue
            confidence = 0.5
            if tense != Tense.UNKNOWN and detect_tense(form.split()) == tense:
                confidence += 0.15
            found.append(Candidate(form, confidence, SuggestionType.TENSE_VARIATION, "tense"))
        return found

    def _synonym_candidates(self, tokens: list[str], vocabulary: list[str]) -> list[Candidate]:
        last = tokens[-1]
        found = [
            Candidate(word, 0.4, SuggestionType.SYNONYM, f"synonym:{last}")
            for word in synonyms(last, vocabulary)
        ]
        found.extend(
            Candidate(word, 0.35, SuggestionType.SYNONYM, f"related:{last}")
            for word in category_members(last, vocabulary)
        )
        return found

    def _sentence_candidates(self, tokens: list[str]) -> list[Candidate]:
        return [
            Candidate(
                match.text,
                0.6 if match.is_prefix else 0.4,
                SuggestionType.FULL_SENTENCE,
                "sentence",
            )
            for match in templates.find_sentences(tokens, limit=3)
        ]

    def _topic_candidates(self, tokens: list[str], vocabulary: list[str]) -> list[Candidate]:
        found = []
        for topic in sorted(detect_topics(tokens)):
            keywords = TOPIC_TAXONOMY[topic]
            found.extend(
                Candidate(word, 0.3, SuggestionType.CONTEXTUAL, f"topic:{topic}")
                for word in vocabulary
                if word in keywords
            )
        return found

    def _fallback_candidates(self, tokens: list[str], vocabulary: list[str]) -> list[Candidate]:
        found = [
            Candidate(word, 0.2, SuggestionType.CONTEXTUAL, "connecting")
            for word, _ in templates.connecting_words(tokens, limit=10)
        ]
        found.extend(Candidate(word, 0.15, SuggestionType.CONTEXTUAL, "vocabulary") for word in vocabulary)
        return found

    def static_candidates(
        self,
        tokens: list[str],
        vocabulary: list[str],
        category: Optional[str] = None,
        category_vocabulary: Optional[list[str]] = None,
    ) -> list[Candidate]:
        found = self._category_candidates(tokens, category, category_vocabulary or vocabulary)
        if not tokens:
            found.extend(self._starter_candidates())
        else:
            found.extend(self._template_candidates(tokens))
            found.extend(self._tense_candidates(tokens))
            found.extend(self._synonym_candidates(tokens, vocabulary))
            found.extend(self._sentence_candidates(tokens))
            found.extend(self._topic_candidates(tokens, vocabulary))
        found.extend(self._fallback_candidates(tokens, vocabulary))
        return found

    # ------------------------------------------------------------------
    # Learned sources
    # ------------------------------------------------------------------

    async def _pattern_candidates(self, tokens: list[str], now: datetime) -> list[Candidate]:
        snapshot = self._patterns.snapshot
        found: list[Candidate] = []
        if not tokens:
            for phrase, count in snapshot.phrases_near_hour(now.hour, TEMPORAL_WINDOW_HOURS)[:5]:
                found.append(
                    Candidate(phrase.split()[0], min(0.75, count / 5), SuggestionType.TEMPORAL, "time-of-day")
                )
            return found

        for remainder, frequency in snapshot.phrase_remainders(tokens)[:5]:
            found.append(
                Candidate(remainder, min(1.0, 0.5 + frequency / 10), SuggestionType.COMMON_PHRASE, "phrase")
            )
        for word, frequency in snapshot.phrase_continuations(tokens)[:5]:
            found.append(Candidate(word, min(0.9, frequency / 10), SuggestionType.COMPLETION, "phrase"))
        for word, weight in snapshot.next_words(tokens)[:8]:
            confidence = min(0.8, weight / 5)
            if snapshot.word_used_at_hour(word, now.hour):
                confidence += HOUR_BONUS
            found.append(Candidate(word, confidence, SuggestionType.NEXT_WORD, "transition"))
        for topic in sorted(detect_topics(tokens)):
            for phrase, frequency in snapshot.topic_phrases(topic)[:3]:
                for word in phrase.split():
                    if word not in tokens:
                        found.append(
                            Candidate(word, min(0.55, 0.35 + frequency / 20), SuggestionType.CONTEXTUAL, f"topic:{topic}")
                        )
        context = " ".join(tokens)
        for phrase in snapshot.related_phrases(context, 3):
            found.append(Candidate(phrase, 0.5, SuggestionType.CONTEXTUAL, "semantic"))
        for correction in snapshot.corrections_for(context)[:3]:
            found.append(
                Candidate(
                    correction.actual,
                    min(0.8, 0.4 + correction.frequency / 10),
                    SuggestionType.NEXT_WORD,
                    f"correction:{correction.suggested}",
                )
            )
        return found

    async def _preference_candidates(self, tokens: list[str], pool: list[str]) -> list[Candidate]:
        found = [
            Candidate(word, score, SuggestionType.PERSONALIZED, "personalized")
            for word, score in self._preferences.personalized_suggestions(tokens, pool)
        ]
        found.extend(
            Candidate(word, confidence, SuggestionType.PERSONALIZED, "frequent-sentence")
            for word, confidence in self._preferences.sentence_continuations(tokens)
        )
        return found

    async def _intent_candidates(self, tokens: list[str]) -> list[Candidate]:
        if not tokens:
            return []
        intent = classify(tokens).value
        return [
            Candidate(text, 0.6, SuggestionType.COMPLETION, f"intent:{intent}")
            for text, _ in self._intents.completions_for(tokens)
        ]

    async def learned_candidates(self, tokens: list[str], pool: list[str], now: datetime) -> list[Candidate]:
        results = await asyncio.gather(
            self._pattern_candidates(tokens, now),
            self._preference_candidates(tokens, pool),
            self._intent_candidates(tokens),
        )
        return [candidate for group in results for candidate in group]

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def suggest(
        self,
        current_words: Iterable[str] | None,
        available_words: Iterable[str] | None = None,
        max_suggestions: Optional[int] = None,
        category: Optional[str] = None,
        category_vocabulary: Iterable[str] | None = None,
        *,
        now: Optional[datetime] = None,
        use_learned: bool = True,
    ) -> list[Suggestion]:
        limit = self._settings.default_max_suggestions if max_suggestions is None else max_suggestions
        if limit <= 0:
            return []
        tokens = tokenize(current_words)
        vocabulary = normalize(available_words)
        now = now or datetime.now().astimezone()

        candidates = self.static_candidates(tokens, vocabulary, category, normalize(category_vocabulary))
        frequency = _no_history
        trust = _full_confidence
        if use_learned:
            pool = vocabulary + [c.key for c in candidates]
            try:
                learned = await asyncio.wait_for(
                    self.learned_candidates(tokens, pool, now),
                    timeout=self._settings.store_timeout_seconds,
                )
            except (asyncio.TimeoutError, StoreUnavailableError) as exc:
                logger.warning(f"Learned sources unavailable, using static suggestions: {exc!r}")
            else:
                candidates = learned + candidates
                frequency = self._patterns.snapshot.word_frequency
                trust = self._patterns.snapshot.word_confidence

        last = tokens[-1] if tokens else None
        candidates = [
            c
            for c in merge_candidates(candidates)
            if c.key != last and (c.key not in tokens or c.key in _CONNECTORS)
        ]
        for c in candidates:
            c.confidence *= trust(c.key)
        ranked = rank(candidates, tokens, frequency)
        return [item.to_suggestion() for item in select(ranked, limit)]
