"""Public facade of the suggestion engine.

Every public method logs and degrades instead of raising.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from aac_engine.config import Settings, settings as default_settings
from aac_engine.language import grammar
from aac_engine.language.intent import classify
from aac_engine.language.variations import (
    base_form,
    is_likely_adjective,
    is_likely_noun,
    is_likely_verb,
    variations,
)
from aac_engine.memory.cache import InMemoryCache, LocalCache
from aac_engine.memory.intents import IntentStore
from aac_engine.memory.patterns import PatternStore
from aac_engine.memory.preferences import AdaptivePreferenceModel, interaction_now
from aac_engine.memory.store import PatternBackend
from aac_engine.models.patterns import IntentPrediction, VocabularyAnalysis, WordPair
from aac_engine.models.preferences import LearningStatistics
from aac_engine.models.suggestions import (
    GrammarCheckResult,
    Suggestion,
    WordVariations,
)
from aac_engine.suggest.aggregator import SuggestionAggregator

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class SuggestionEngine:
    """Predictive suggestions plus the learning loop behind them.

    Lifecycle:
        engine = SuggestionEngine(backend)
        await engine.initialize()   # loads the session snapshots
        ...
        await engine.close()        # flushes deferred writes
    """

    def __init__(
        self,
        backend: PatternBackend,
        cache: LocalCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._backend = backend
        self._cache = cache or InMemoryCache()
        self.patterns = PatternStore(backend, self._settings)
        self.preferences = AdaptivePreferenceModel(backend, self._cache, self._settings)
        self.intents = IntentStore(backend, self._settings)
        self.aggregator = SuggestionAggregator(
            self.patterns, self.preferences, self.intents, self._settings
        )
        self._initialized = False
        self._loaded = False
        self._generation = 0
        self._inflight: asyncio.Task | None = None
        self._last_sentence: tuple[str, datetime] | None = None
        self._next_intentions: list[str] = []

    @property
    def backend(self) -> PatternBackend:
        return self._backend

    @property
    def next_intentions(self) -> list[str]:
        """Example sentences predicted after the last completed sentence."""
        return list(self._next_intentions)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        if self._initialized:
            logger.warning("SuggestionEngine already initialized - skipping")
            return
        try:
            await self._backend.initialize()
            await self.load()
        except Exception:
            logger.exception("Suggestion engine started without learned data")
        self._initialized = True
        logger.info(f"Suggestion engine initialized (scope={self._backend.scope})")

    async def load(self) -> None:
        """Rebuild every session snapshot from the store."""
        await asyncio.gather(
            self.patterns.load(),
            self.preferences.load(),
            self.intents.load(),
        )
        self._loaded = True

    async def flush(self) -> int:
        """Retry writes deferred while the store was unavailable."""
        try:
            counts = await asyncio.gather(
                self.patterns.flush(),
                self.preferences.flush(),
                self.intents.flush(),
            )
        except Exception:
            logger.exception("Flushing deferred writes failed")
            return 0
        return sum(counts)

    async def close(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        await self.flush()
        try:
            await self._backend.close()
        except Exception:
            logger.exception("Closing the pattern backend failed")
        self._initialized = False

    @property
    def pending_writes(self) -> int:
        return self.patterns.pending_writes + self.preferences.pending_writes + self.intents.pending_writes

    async def status(self) -> dict[str, Any]:
        try:
            reachable = await self._backend.ping()
        except Exception:
            logger.exception("Store ping failed")
            reachable = False
        return {
            "store": "connected" if reachable else "unavailable",
            "backend": type(self._backend).__name__,
            "scope": self._backend.scope,
            "loaded": self._loaded,
            "degraded": self.patterns.snapshot.degraded or not reachable,
            "pending_writes": self.pending_writes,
        }

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    async def _ensure_loaded(self) -> bool:
        if self._loaded:
            return True
        try:
            await asyncio.wait_for(self.load(), timeout=self._settings.store_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Loading learned data timed out, answering from templates")
        except Exception:
            logger.exception("Loading learned data failed, answering from templates")
        return self._loaded

    async def _suggest(
        self,
        current_words: Iterable[str] | None,
        available_words: Iterable[str] | None,
        max_suggestions: Optional[int],
        category: Optional[str],
        category_vocabulary: Iterable[str] | None,
        now: Optional[datetime],
    ) -> list[Suggestion]:
        use_learned = await self._ensure_loaded()
        return await self.aggregator.suggest(
            current_words,
            available_words,
            max_suggestions,
            category,
            category_vocabulary,
            now=now,
            use_learned=use_learned,
        )

    async def get_suggestions(
        self,
        current_words: Iterable[str] | None,
        available_words: Iterable[str] | None = None,
        max_suggestions: Optional[int] = None,
        category: Optional[str] = None,
        category_vocabulary: Iterable[str] | None = None,
        *,
        now: Optional[datetime] = None,
    ) -> list[Suggestion]:
        """Ranked suggestions for the current utterance.

        A newer call supersedes one still in flight; the superseded call
        returns an empty list so stale suggestions are never shown.
        """
        self._generation += 1
        generation = self._generation
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        task = asyncio.create_task(
            self._suggest(current_words, available_words, max_suggestions, category, category_vocabulary, now)
        )
        self._inflight = task
        try:
            result = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.debug(f"Suggestion query {generation} superseded")
            return []
        except Exception:
            logger.exception("Suggestion query failed")
            return []
        finally:
            if self._inflight is task:
                self._inflight = None

        if generation != self._generation:
            logger.debug(f"Discarding stale suggestions from query {generation}")
            return []
        return result

    # ------------------------------------------------------------------
    # Learning events
    # ------------------------------------------------------------------

    async def record_utterance(
        self,
        text: str,
        category: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        try:
            await self.patterns.record_utterance(text, category, now=now)
        except Exception:
            logger.exception("Recording utterance failed")

    async def on_suggestion_selected(
        self,
        suggestion: Suggestion,
        context_words: Iterable[str] | None,
        category: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        context = list(context_words or [])
        try:
            await self.preferences.record_interaction(
                interaction_now(
                    suggestion.text,
                    suggestion.type,
                    context,
                    True,
                    suggestion.confidence,
                    category,
                    now,
                )
            )
            await self.intents.record_pattern(context, suggestion.text)
            if context:
                await self.patterns.track_embedding(
                    context, classify(context).value, [suggestion.text], now=now
                )
        except Exception:
            logger.exception("Recording selected suggestion failed")

    async def on_suggestions_ignored(
        self,
        suggestions: Iterable[Suggestion],
        context_words: Iterable[str] | None,
        category: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        context = list(context_words or [])
        try:
            for suggestion in suggestions or []:
                await self.preferences.record_interaction(
                    interaction_now(
                        suggestion.text,
                        suggestion.type,
                        context,
                        False,
                        suggestion.confidence,
                        category,
                        now,
                    )
                )
        except Exception:
            logger.exception("Recording ignored suggestions failed")

    async def on_suggestion_corrected(
        self,
        suggested: str,
        actual: str,
        context_words: Iterable[str] | None = None,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """The user replaced ``suggested`` with ``actual`` after ``context_words``."""
        try:
            await self.patterns.track_correction(suggested, actual, context_words, now=now)
        except Exception:
            logger.exception("Recording correction failed")

    async def on_sentence_completed(
        self,
        text: str,
        *,
        now: Optional[datetime] = None,
    ) -> list[IntentPrediction]:
        """Track intent sequences and predict what the user will say next."""
        now = now or _local_now()
        text = (text or "").strip()
        if not text:
            return []
        predictions: list[IntentPrediction] = []
        try:
            if self._last_sentence is not None:
                previous, previous_at = self._last_sentence
                gap = max(0.0, (now - previous_at).total_seconds())
                await self.intents.record_transition(previous, text, gap)
            predictions = self.intents.predict_next(text)
            self._next_intentions = [
                example for p in predictions for example in p.example_completions
            ][:5]
            self._last_sentence = (text, now)
            await self.patterns.record_utterance(text, now=now)
        except Exception:
            logger.exception("Tracking completed sentence failed")
        return predictions

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def get_learning_statistics(self) -> LearningStatistics:
        try:
            frequent = [
                (record.text, record.frequency)
                for record in self.patterns.snapshot.top_phrases(10)
                if record.frequency >= 2
            ]
            return self.preferences.statistics(self.intents.distribution(), frequent)
        except Exception:
            logger.exception("Computing learning statistics failed")
            return LearningStatistics()

    def analyze_vocabulary(self) -> VocabularyAnalysis:
        try:
            return self.patterns.snapshot.analyze_vocabulary()
        except Exception:
            logger.exception("Vocabulary analysis failed")
            return VocabularyAnalysis()

    def confident_word_pairs(self, min_frequency: float = 3) -> list[WordPair]:
        try:
            return self.patterns.snapshot.confident_word_pairs(min_frequency)
        except Exception:
            logger.exception("Listing word pairs failed")
            return []

    def related_phrases(self, words: Iterable[str] | None, limit: int = 5) -> list[str]:
        """Phrases previously chosen after contexts like ``words``."""
        return self.patterns.snapshot.related_phrases(" ".join(words or []), limit)

    def check_grammar(self, words: Iterable[str] | None) -> GrammarCheckResult:
        try:
            return grammar.check(words)
        except Exception:
            logger.exception("Grammar check failed")
            return GrammarCheckResult()

    def word_variations(self, word: str) -> WordVariations:
        word = (word or "").strip().lower()
        return WordVariations(
            word=word,
            base_form=base_form(word),
            variations=sorted(variations(word)),
            is_verb=is_likely_verb(word),
            is_noun=is_likely_noun(word),
            is_adjective=is_likely_adjective(word),
        )

    async def reset(self) -> None:
        """Forget everything learned for this identity scope."""
        try:
            await self.patterns.reset()
            await self.preferences.reset()
            await self.intents.reset()
        except Exception:
            logger.exception("Resetting learned data failed")
        self._last_sentence = None
        self._next_intentions = []
