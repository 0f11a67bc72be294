"""Learned intent patterns and intent-to-intent sequences."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from aac_engine.config import Settings, settings as default_settings
from aac_engine.language.intent import classify
from aac_engine.language.text import normalize
from aac_engine.memory.store import (
    PatternBackend,
    PendingWrite,
    RecordType,
    StoreUnavailableError,
    WriteQueue,
)
from aac_engine.models.patterns import (
    IntentionSequence,
    IntentPattern,
    IntentPrediction,
    IntentType,
)

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5


def _sequence_key(first: IntentType, second: IntentType) -> str:
    return f"{first.value}->{second.value}"


def _pattern_key(intent: IntentType, trigger_words: list[str]) -> str:
    return f"{intent.value}|{' '.join(trigger_words)}"


class IntentStore:
    """Intent patterns learned from selections, and which intent follows which.

    Lifecycle:
        intents = IntentStore(backend)
        await intents.load()
    """

    def __init__(self, backend: PatternBackend, settings: Settings | None = None) -> None:
        self._backend = backend
        self._settings = settings or default_settings
        self._patterns: dict[str, IntentPattern] = {}
        self._sequences: dict[str, IntentionSequence] = {}
        self._gap_totals: dict[str, float] = {}
        self._queue = WriteQueue(self._settings.pending_write_limit)
        self._lock = asyncio.Lock()

    @property
    def patterns(self) -> list[IntentPattern]:
        return list(self._patterns.values())

    @property
    def sequences(self) -> list[IntentionSequence]:
        return list(self._sequences.values())

    @property
    def pending_writes(self) -> int:
        return len(self._queue)

    def _confidence(self, frequency: int) -> float:
        increment = self._settings.intent_confidence_increment
        return min(1.0, BASE_CONFIDENCE + increment * max(0, frequency - 1))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _ingest_pattern(self, doc: dict[str, Any]) -> None:
        meta = doc.get("metadata") or {}
        frequency = int(doc.get("frequency", 0))
        pattern = IntentPattern(
            intent_type=IntentType(meta["intent_type"]),
            trigger_words=list(meta.get("trigger_words", [])),
            common_completions=list(meta.get("common_completions", [])),
            frequency=frequency,
            confidence=self._confidence(frequency),
        )
        self._patterns[doc["key"]] = pattern

    def _ingest_sequence(self, doc: dict[str, Any]) -> None:
        meta = doc.get("metadata") or {}
        frequency = int(doc.get("frequency", 0))
        total_gap = float(meta.get("total_gap_seconds", 0.0))
        self._sequences[doc["key"]] = IntentionSequence(
            first_intent=IntentType(meta["first_intent"]),
            second_intent=IntentType(meta["second_intent"]),
            frequency=frequency,
            average_gap_seconds=total_gap / frequency if frequency else 0.0,
        )
        self._gap_totals[doc["key"]] = total_gap

    async def load(self) -> None:
        try:
            pattern_docs = await self._backend.query(RecordType.INTENT_PATTERN)
            sequence_docs = await self._backend.query(RecordType.INTENT_SEQUENCE)
        except StoreUnavailableError as exc:
            logger.warning(f"Intent records unavailable, keeping current state: {exc}")
            return
        async with self._lock:
            self._patterns.clear()
            self._sequences.clear()
            self._gap_totals.clear()
            for ingest, docs in ((self._ingest_pattern, pattern_docs), (self._ingest_sequence, sequence_docs)):
                for doc in docs:
                    try:
                        ingest(doc)
                    except (KeyError, TypeError, ValueError, ValidationError) as exc:
                        logger.warning(f"Skipping malformed intent record {doc.get('key')!r}: {exc}")
        logger.info(f"Loaded {len(self._patterns)} intent patterns, {len(self._sequences)} sequences")

    async def flush(self) -> int:
        async with self._lock:
            return await self._queue.flush(self._backend)

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    async def record_pattern(self, context_words: Iterable[str] | None, completion: str) -> IntentPattern | None:
        """Remember that ``completion`` was chosen after ``context_words``."""
        trigger = normalize(context_words)
        completion = completion.strip().lower()
        if not trigger or not completion:
            return None
        intent = classify(trigger)
        key = _pattern_key(intent, trigger)
        async with self._lock:
            pattern = self._patterns.get(key) or IntentPattern(intent_type=intent, trigger_words=trigger)
            if completion not in pattern.common_completions:
                pattern.common_completions.append(completion)
            pattern.frequency += 1
            pattern.confidence = self._confidence(pattern.frequency)
            self._patterns[key] = pattern
            await self._queue.submit(
                self._backend,
                [
                    PendingWrite(
                        RecordType.INTENT_PATTERN,
                        key,
                        1,
                        {"intent_type": intent.value, "trigger_words": trigger},
                        add_to_set={"common_completions": (completion,)},
                    )
                ],
            )
        return pattern

    async def record_transition(self, first: str, second: str, gap_seconds: float) -> IntentionSequence:
        """Count that ``second`` followed ``first`` after ``gap_seconds``."""
        first_intent, second_intent = classify(first), classify(second)
        key = _sequence_key(first_intent, second_intent)
        gap = max(0.0, float(gap_seconds))
        async with self._lock:
            sequence = self._sequences.get(key) or IntentionSequence(
                first_intent=first_intent, second_intent=second_intent
            )
            total = self._gap_totals.get(key, 0.0) + gap
            sequence.frequency += 1
            sequence.average_gap_seconds = total / sequence.frequency
            self._gap_totals[key] = total
            self._sequences[key] = sequence
            await self._queue.submit(
                self._backend,
                [
                    PendingWrite(
                        RecordType.INTENT_SEQUENCE,
                        key,
                        1,
                        {"first_intent": first_intent.value, "second_intent": second_intent.value},
                        increments={"total_gap_seconds": gap},
                    )
                ],
            )
        logger.debug(f"Tracked intent sequence {key} (gap {gap:.1f}s)")
        return sequence

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _ranked_patterns(self, intent: IntentType) -> list[IntentPattern]:
        matching = [p for p in self._patterns.values() if p.intent_type == intent]
        return sorted(matching, key=lambda p: (-p.confidence, -p.frequency, p.trigger_words))

    def predict_next(self, utterance: str | Iterable[str], limit: int = 5) -> list[IntentPrediction]:
        """Intents most likely to follow ``utterance``, with example completions."""
        current = classify(utterance)
        following = sorted(
            (s for s in self._sequences.values() if s.first_intent == current),
            key=lambda s: (-s.frequency, s.second_intent.value),
        )[:limit]
        predictions = []
        for sequence in following:
            patterns = sorted(
                (p for p in self._patterns.values() if p.intent_type == sequence.second_intent),
                key=lambda p: (-p.frequency, p.trigger_words),
            )[:3]
            examples = [c for p in patterns for c in p.common_completions[:2]]
            predictions.append(
                IntentPrediction(
                    intent=sequence.second_intent,
                    confidence=min(1.0, sequence.frequency / 10),
                    example_completions=examples,
                )
            )
        return predictions

    def completions_for(self, context_words: Iterable[str] | None, limit: int = 5) -> list[tuple[str, float]]:
        """Completions learned for the intent of the current utterance."""
        words = normalize(context_words)
        if not words:
            return []
        seen: dict[str, float] = {}
        for pattern in self._ranked_patterns(classify(words))[:10]:
            for completion in pattern.common_completions:
                if completion not in seen:
                    seen[completion] = pattern.confidence
        return list(seen.items())[:limit]

    def distribution(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for pattern in self._patterns.values():
            counts[pattern.intent_type.value] = counts.get(pattern.intent_type.value, 0) + pattern.frequency
        return counts

    async def reset(self) -> None:
        async with self._lock:
            self._queue.clear()
            await self._backend.delete(RecordType.INTENT_PATTERN)
            await self._backend.delete(RecordType.INTENT_SEQUENCE)
            self._patterns.clear()
            self._sequences.clear()
            self._gap_totals.clear()
