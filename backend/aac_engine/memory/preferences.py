"""Adaptive preference model learned from accepted and ignored suggestions.

The interaction log in the store is the source of truth. The
``PreferenceModel`` is a cache of counters derived from it: ``load()``
rebuilds it from the log and every new interaction updates it in place.
The last derived model is also kept in the local cache so that a store
outage at session start still personalises suggestions.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Iterable

from pydantic import ValidationError

from aac_engine.config import Settings, settings as default_settings
from aac_engine.language.text import context_key, normalize
from aac_engine.memory.cache import LocalCache
from aac_engine.memory.store import (
    PatternBackend,
    PendingWrite,
    RecordType,
    StoreUnavailableError,
    WriteQueue,
)
from aac_engine.models.preferences import (
    AccuracyPoint,
    LearningStatistics,
    PreferenceModel,
    SuggestionInteraction,
    WordCount,
)
from aac_engine.models.suggestions import SuggestionType

logger = logging.getLogger(__name__)

CONTEXT_BONUS = 0.3
IGNORE_PENALTY = 0.3
SENTENCE_MIN_COUNT = 2
SENTENCE_CONTEXT_WORDS = 3


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class AdaptivePreferenceModel:
    """Online accept/ignore counters and the personalisation score derived from them."""

    def __init__(
        self,
        backend: PatternBackend,
        cache: LocalCache,
        settings: Settings | None = None,
    ) -> None:
        self._backend = backend
        self._cache = cache
        self._settings = settings or default_settings
        self._model = PreferenceModel()
        self._queue = WriteQueue(self._settings.pending_write_limit)
        self._lock = asyncio.Lock()

    @property
    def model(self) -> PreferenceModel:
        return self._model

    @property
    def cache_key(self) -> str:
        return f"preferences:{self._backend.scope}"

    @property
    def pending_writes(self) -> int:
        return len(self._queue)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def _apply(self, model: PreferenceModel, interaction: SuggestionInteraction) -> None:
        word = interaction.suggestion_text.strip().lower()
        if interaction.was_selected:
            model.selected_counts[word] = model.selected_counts.get(word, 0) + 1
            if (
                interaction.suggestion_type == SuggestionType.FULL_SENTENCE
                or len(interaction.context_words) >= SENTENCE_CONTEXT_WORDS
            ):
                model.sentence_counts[word] = model.sentence_counts.get(word, 0) + 1
            patterns = model.context_patterns.setdefault(context_key(interaction.context_words), {})
            patterns[word] = patterns.get(word, 0) + 1
        else:
            model.ignored_counts[word] = model.ignored_counts.get(word, 0) + 1
        model.total_interactions += 1
        model.accuracy_history.append(
            AccuracyPoint(timestamp=interaction.timestamp, accuracy=model.accuracy)
        )
        limit = self._settings.accuracy_history_limit
        if len(model.accuracy_history) > limit:
            del model.accuracy_history[:-limit]

    def rebuild(self, interactions: Iterable[SuggestionInteraction]) -> PreferenceModel:
        """Recompute the whole model from an interaction log."""
        model = PreferenceModel()
        for interaction in sorted(interactions, key=lambda i: i.timestamp):
            self._apply(model, interaction)
        return model

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> PreferenceModel:
        try:
            docs = await self._backend.query(RecordType.INTERACTION)
        except StoreUnavailableError as exc:
            logger.warning(f"Interaction log unavailable, using cached preference model: {exc}")
            cached = await self._cache.get(self.cache_key)
            if cached:
                try:
                    self._model = PreferenceModel.model_validate_json(cached)
                except ValidationError as parse_exc:
                    logger.warning(f"Discarding unreadable cached preference model: {parse_exc}")
            return self._model

        interactions = []
        for doc in docs:
            try:
                interactions.append(SuggestionInteraction.model_validate(doc.get("metadata") or {}))
            except ValidationError as exc:
                logger.warning(f"Skipping malformed interaction {doc.get('key')!r}: {exc}")
        model = self.rebuild(interactions)
        async with self._lock:
            self._model = model
        await self._cache.set(self.cache_key, model.model_dump_json())
        logger.info(f"Rebuilt preference model from {len(interactions)} interactions")
        return model

    async def flush(self) -> int:
        async with self._lock:
            return await self._queue.flush(self._backend)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    async def record_interaction(self, interaction: SuggestionInteraction) -> None:
        key = f"{interaction.timestamp.isoformat()}|{uuid.uuid4().hex[:12]}"
        write = PendingWrite(
            RecordType.INTERACTION,
            key,
            1,
            interaction.model_dump(mode="json"),
        )
        async with self._lock:
            self._apply(self._model, interaction)
            await self._queue.submit(self._backend, [write])
            snapshot = self._model.model_dump_json()
        await self._cache.set(self.cache_key, snapshot)

    async def reset(self) -> None:
        async with self._lock:
            self._queue.clear()
            await self._backend.delete(RecordType.INTERACTION)
            self._model = PreferenceModel()
        await self._cache.set(self.cache_key, self._model.model_dump_json())
        logger.info("Preference model reset")

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def personalized_score(self, word: str, context: str | Iterable[str] | None = None) -> float:
        """Selection ratio plus a context co-occurrence bonus, in [0, 1].

        Unknown words score 0.
        """
        word = word.strip().lower()
        if isinstance(context, str):
            key = context.strip().lower()
        else:
            key = context_key(context)
        selected = self._model.selected_counts.get(word, 0)
        ignored = self._model.ignored_counts.get(word, 0)

        score = 0.0
        if selected:
            score += selected / (selected + ignored + 1)
        score += self._model.context_patterns.get(key, {}).get(word, 0) * CONTEXT_BONUS
        if ignored > selected * 2:
            score *= IGNORE_PENALTY
        return _clamp(score)

    def personalized_suggestions(
        self,
        context_words: Iterable[str] | None,
        candidates: Iterable[str] = (),
        limit: int = 5,
    ) -> list[tuple[str, float]]:
        words = normalize(context_words)
        key = " ".join(words)
        pool = set(normalize(candidates))
        pool.update(self._model.context_patterns.get(key, {}))

        scored = []
        for word in pool:
            score = self.personalized_score(word, key)
            if score > 0:
                scored.append((word, score))
        scored.sort(key=lambda item: (-item[1], item[0]))
        return scored[:limit]

    def sentence_continuations(self, context_words: Iterable[str] | None) -> list[tuple[str, float]]:
        """Next word of frequently selected sentences that start with the context."""
        words = normalize(context_words)
        if not words:
            return []
        found: dict[str, float] = {}
        for sentence, count in self._model.sentence_counts.items():
            if count < SENTENCE_MIN_COUNT:
                continue
            tokens = sentence.split()
            if len(tokens) > len(words) and tokens[: len(words)] == words:
                confidence = _clamp(min(1.0, count / 5) + 0.3)
                nxt = tokens[len(words)]
                found[nxt] = max(found.get(nxt, 0.0), confidence)
        return sorted(found.items(), key=lambda item: (-item[1], item[0]))

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def statistics(
        self,
        intent_distribution: dict[str, int] | None = None,
        frequent_sentences: Iterable[tuple[str, int]] = (),
        limit: int = 10,
    ) -> LearningStatistics:
        model = self._model
        selected, ignored = model.total_selected, model.total_ignored

        def top(counts: dict[str, int]) -> list[WordCount]:
            ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
            return [WordCount(word=w, count=c) for w, c in ranked[:limit]]

        return LearningStatistics(
            total_interactions=model.total_interactions,
            selection_rate=selected / (selected + ignored) if selected + ignored else 0.0,
            top_selected_words=top(model.selected_counts),
            top_ignored_words=top(model.ignored_counts),
            model_accuracy=model.accuracy,
            intent_distribution=dict(intent_distribution or {}),
            frequent_sentences=[WordCount(word=s, count=c) for s, c in list(frequent_sentences)[:limit]],
            accuracy_history_size=len(model.accuracy_history),
        )


def interaction_now(
    suggestion_text: str,
    suggestion_type: SuggestionType,
    context_words: Iterable[str] | None,
    was_selected: bool,
    confidence: float,
    category: str | None = None,
    now: datetime | None = None,
) -> SuggestionInteraction:
    """Build an interaction stamped with the local hour and weekday."""
    now = now or datetime.now().astimezone()
    return SuggestionInteraction(
        suggestion_text=suggestion_text,
        suggestion_type=suggestion_type,
        context_words=tuple(normalize(context_words)),
        was_selected=was_selected,
        confidence_at_time=min(1.0, max(0.0, confidence)),
        hour_of_day=now.hour,
        day_of_week=now.weekday(),
        category=category,
        timestamp=now,
    )
