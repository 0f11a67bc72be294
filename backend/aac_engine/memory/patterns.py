"""Pattern store: words, phrases, n-gram transitions, temporal and topic usage.

The store keeps an in-memory ``PatternSnapshot`` that is rebuilt from the
backend by ``load()`` once per session and then updated in place by
every recorded utterance, so suggestion queries never hit the backend.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from pydantic import ValidationError

from aac_engine.config import Settings, settings as default_settings
from aac_engine.language.text import context_key, detect_topics, tokenize
from aac_engine.memory.store import (
    PatternBackend,
    PendingWrite,
    RecordType,
    StoreUnavailableError,
    WriteQueue,
)
from aac_engine.models.patterns import (
    ContextualEmbedding,
    CorrectionRecord,
    PhraseRecord,
    VocabularyAnalysis,
    WordPair,
    WordRecord,
)

logger = logging.getLogger(__name__)

_SNAPSHOT_TYPES = (
    RecordType.WORD,
    RecordType.PHRASE,
    RecordType.TRANSITION,
    RecordType.TEMPORAL,
    RecordType.TOPIC,
    RecordType.EMBEDDING,
    RecordType.CORRECTION,
)

UNIGRAM_WEIGHT = 0.7
CORRECTED_WORD_CONFIDENCE = 0.5


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class PatternSnapshot:
    """Session-scoped in-memory view of the pattern store."""

    words: dict[str, WordRecord] = field(default_factory=dict)
    phrases: dict[str, PhraseRecord] = field(default_factory=dict)
    transitions: dict[str, dict[str, float]] = field(default_factory=dict)
    temporal: dict[str, dict[int, float]] = field(default_factory=dict)
    topics: dict[str, dict[str, float]] = field(default_factory=dict)
    embeddings: dict[str, ContextualEmbedding] = field(default_factory=dict)
    corrections: dict[str, CorrectionRecord] = field(default_factory=dict)
    degraded: bool = False

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge(self, record_type: RecordType, key: str, frequency: float, metadata: dict[str, Any]) -> None:
        """Fold a stored document or a fresh write into the snapshot."""
        if record_type == RecordType.WORD:
            record = self.words.get(key) or WordRecord(word=key)
            record.frequency += int(frequency)
            if metadata.get("last_used_at") is not None:
                record.last_used_at = _aware(metadata["last_used_at"])
            record.context_hours.update(int(h) for h in metadata.get("context_hours", ()))
            if metadata.get("confidence") is not None:
                record.confidence = float(metadata["confidence"])
            if metadata.get("last_corrected_at") is not None:
                record.last_corrected_at = _aware(metadata["last_corrected_at"])
            self.words[key] = record
        elif record_type == RecordType.PHRASE:
            record = self.phrases.get(key)
            data = record.model_dump() if record else {"text": key}
            data["frequency"] = data.get("frequency", 0) + int(frequency)
            for name in ("last_used_at", "hour_of_day", "day_of_week", "word_count", "category"):
                if metadata.get(name) is not None:
                    data[name] = metadata[name]
            data["topics"] = set(data.get("topics", ())) | set(metadata.get("topics", ()))
            parsed = PhraseRecord.model_validate(data)
            parsed.last_used_at = _aware(parsed.last_used_at)
            self.phrases[key] = parsed
        elif record_type == RecordType.TRANSITION:
            source, target = metadata["from"], metadata["to"]
            edges = self.transitions.setdefault(source, {})
            edges[target] = edges.get(target, 0.0) + float(frequency)
        elif record_type == RecordType.TEMPORAL:
            buckets = self.temporal.setdefault(metadata["phrase"], {})
            hour = int(metadata["hour"])
            if not 0 <= hour <= 23:
                raise ValueError(f"hour out of range: {hour}")
            buckets[hour] = buckets.get(hour, 0.0) + float(frequency)
        elif record_type == RecordType.TOPIC:
            phrases = self.topics.setdefault(metadata["topic"], {})
            phrases[metadata["phrase"]] = phrases.get(metadata["phrase"], 0.0) + float(frequency)
        elif record_type == RecordType.EMBEDDING:
            embedding = self.embeddings.get(key) or ContextualEmbedding(
                phrase=metadata["phrase"], semantic_category=metadata["semantic_category"]
            )
            embedding.usage_count += int(frequency)
            for phrase in metadata.get("related_phrases", ()):
                if phrase not in embedding.related_phrases:
                    embedding.related_phrases.append(phrase)
            if metadata.get("last_used_at") is not None:
                embedding.last_used_at = _aware(metadata["last_used_at"])
            self.embeddings[key] = embedding
        elif record_type == RecordType.CORRECTION:
            correction = self.corrections.get(key) or CorrectionRecord(
                suggested=metadata["suggested"], actual=metadata["actual"]
            )
            correction.frequency += int(frequency)
            for context in metadata.get("contexts", ()):
                if context not in correction.contexts:
                    correction.contexts.append(context)
            if metadata.get("last_corrected_at") is not None:
                correction.last_corrected_at = _aware(metadata["last_corrected_at"])
            self.corrections[key] = correction

    def ingest(self, doc: dict[str, Any]) -> bool:
        """Merge one stored document; malformed documents are skipped."""
        try:
            self.merge(
                RecordType(doc["record_type"]),
                str(doc["key"]),
                float(doc.get("frequency", 0)),
                dict(doc.get("metadata") or {}),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning(f"Skipping malformed {doc.get('record_type')} record {doc.get('key')!r}: {exc}")
            return False
        return True

    # ------------------------------------------------------------------
    # Lookups used by the aggregator
    # ------------------------------------------------------------------

    def word_frequency(self, word: str) -> int:
        record = self.words.get(word.lower())
        return record.frequency if record else 0

    def phrase_continuations(self, words: list[str]) -> list[tuple[str, int]]:
        """Next word of every stored phrase that extends ``words``."""
        if not words:
            return []
        counts: Counter[str] = Counter()
        for text, record in self.phrases.items():
            tokens = text.split()
            if len(tokens) > len(words) and tokens[: len(words)] == words:
                counts[tokens[len(words)]] += record.frequency
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def phrase_remainders(self, words: list[str], min_frequency: int = 2) -> list[tuple[str, int]]:
        """Rest of frequently used phrases that extend ``words``."""
        found = []
        for text, record in self.phrases.items():
            if record.frequency < min_frequency:
                continue
            tokens = text.split()
            if len(tokens) > len(words) and tokens[: len(words)] == words:
                found.append((" ".join(tokens[len(words):]), record.frequency))
        return sorted(found, key=lambda item: (-item[1], item[0]))

    def next_words(self, words: list[str]) -> list[tuple[str, float]]:
        """Trigram edges at full weight, bigram edges at a reduced weight."""
        if not words:
            return []
        weights: dict[str, float] = {}
        if len(words) >= 2:
            for target, frequency in self.transitions.get(" ".join(words[-2:]), {}).items():
                weights[target] = frequency
        for target, frequency in self.transitions.get(words[-1], {}).items():
            if target not in weights:
                weights[target] = frequency * UNIGRAM_WEIGHT
        return sorted(weights.items(), key=lambda item: (-item[1], item[0]))

    def phrases_near_hour(self, hour: int, window: int = 2) -> list[tuple[str, float]]:
        counts: dict[str, float] = {}
        for phrase, buckets in self.temporal.items():
            total = sum(
                count
                for bucket, count in buckets.items()
                if min(abs(bucket - hour), 24 - abs(bucket - hour)) <= window
            )
            if total:
                counts[phrase] = total
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def word_used_at_hour(self, word: str, hour: int) -> bool:
        record = self.words.get(word.lower())
        return record is not None and hour in record.context_hours

    def top_phrases(self, limit: int = 3) -> list[PhraseRecord]:
        ranked = sorted(self.phrases.values(), key=lambda r: (-r.frequency, r.text))
        return ranked[:limit]

    def topic_phrases(self, topic: str) -> list[tuple[str, float]]:
        phrases = self.topics.get(topic, {})
        return sorted(phrases.items(), key=lambda item: (-item[1], item[0]))

    def word_confidence(self, word: str) -> float:
        record = self.words.get(word.lower())
        return record.confidence if record else 1.0

    def related_phrases(self, phrase: str, limit: int = 5) -> list[str]:
        """Phrases chosen after contexts that contain ``phrase`` or were chosen with it."""
        phrase = phrase.strip().lower()
        if not phrase:
            return []
        matching = [
            embedding
            for embedding in self.embeddings.values()
            if phrase in embedding.phrase or phrase in embedding.related_phrases
        ]
        matching.sort(key=lambda e: (-e.usage_count, e.phrase))
        found: list[str] = []
        for embedding in matching[:limit]:
            for related in embedding.related_phrases:
                if related not in found:
                    found.append(related)
        return found[:limit]

    def corrections_for(self, context: str) -> list[CorrectionRecord]:
        found = [record for record in self.corrections.values() if context in record.contexts]
        return sorted(found, key=lambda r: (-r.frequency, r.actual))

    def confident_word_pairs(self, min_frequency: float = 3) -> list[WordPair]:
        """Single-word transitions used at least ``min_frequency`` times."""
        pairs = [
            WordPair(from_word=source, to_word=target, frequency=frequency, confidence=min(1.0, frequency / 10))
            for source, edges in self.transitions.items()
            if " " not in source
            for target, frequency in edges.items()
            if frequency >= min_frequency
        ]
        return sorted(pairs, key=lambda p: (-p.frequency, p.from_word, p.to_word))

    def analyze_vocabulary(self) -> VocabularyAnalysis:
        words = [record for record in self.words.values() if record.frequency > 0]
        if not words:
            return VocabularyAnalysis()
        ranked = sorted(words, key=lambda r: (-r.frequency, r.word))
        phrases = list(self.phrases.values())
        return VocabularyAnalysis(
            total_words=len(words),
            average_word_length=sum(len(r.word) for r in words) / len(words),
            most_common_words=[r.word for r in ranked[:10]],
            preferred_sentence_length=sum(p.word_count for p in phrases) / len(phrases) if phrases else 0.0,
            vocabulary_diversity=len(words) / sum(r.frequency for r in words),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "phrases": self.phrases,
            "transitions": self.transitions,
            "topics": self.topics,
            "temporal": self.temporal,
            "embeddings": self.embeddings,
            "corrections": self.corrections,
        }


class PatternStore:
    """Records utterances and serves the in-memory snapshot.

    Lifecycle:
        store = PatternStore(backend)
        await store.load()     # once per session
        ...
        await store.flush()    # retry deferred writes
    """

    def __init__(self, backend: PatternBackend, settings: Settings | None = None) -> None:
        self._backend = backend
        self._settings = settings or default_settings
        self._snapshot = PatternSnapshot()
        self._queue = WriteQueue(self._settings.pending_write_limit)
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> PatternSnapshot:
        return self._snapshot

    @property
    def pending_writes(self) -> int:
        return len(self._queue)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> PatternSnapshot:
        """Rebuild the snapshot from the backend."""
        snapshot = PatternSnapshot()
        try:
            for record_type in _SNAPSHOT_TYPES:
                for doc in await self._backend.query(record_type):
                    snapshot.ingest(doc)
        except StoreUnavailableError as exc:
            logger.warning(f"Pattern store unavailable, keeping current snapshot: {exc}")
            self._snapshot.degraded = True
            return self._snapshot
        async with self._lock:
            self._snapshot = snapshot
        logger.info(
            f"Loaded pattern snapshot: {len(snapshot.phrases)} phrases, "
            f"{len(snapshot.words)} words, {len(snapshot.transitions)} transition sources"
        )
        return snapshot

    def load_all(self) -> dict[str, Any]:
        """Phrases, transitions, topics and temporal buckets of the current snapshot."""
        return self._snapshot.as_dict()

    async def flush(self) -> int:
        async with self._lock:
            written = await self._queue.flush(self._backend)
            if not self._queue:
                self._snapshot.degraded = False
            return written

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _transition_weight(self, phrase: str, now: datetime) -> float:
        previous = self._snapshot.phrases.get(phrase)
        if previous is None:
            return 1.0
        window = timedelta(hours=self._settings.recency_window_hours)
        if now - _aware(previous.last_used_at) <= window:
            return self._settings.recency_weight
        return 1.0

    def _build_writes(
        self, tokens: list[str], category: str | None, now: datetime
    ) -> list[PendingWrite]:
        phrase = " ".join(tokens)
        hour, weekday = now.hour, now.weekday()
        topics = sorted(detect_topics(tokens))
        weight = self._transition_weight(phrase, now)

        writes = [
            PendingWrite(
                RecordType.PHRASE,
                phrase,
                1,
                {
                    "last_used_at": now,
                    "hour_of_day": hour,
                    "day_of_week": weekday,
                    "word_count": len(tokens),
                    "category": category,
                },
                add_to_set={"topics": tuple(topics)},
            )
        ]
        for word, count in sorted(Counter(tokens).items()):
            writes.append(
                PendingWrite(
                    RecordType.WORD,
                    word,
                    count,
                    {"last_used_at": now},
                    add_to_set={"context_hours": (hour,)},
                )
            )

        edges: Counter[tuple[str, str, int]] = Counter()
        for i in range(len(tokens) - 1):
            edges[(tokens[i], tokens[i + 1], 1)] += 1
            if i >= 1:
                edges[(f"{tokens[i - 1]} {tokens[i]}", tokens[i + 1], 2)] += 1
        for (source, target, order), count in sorted(edges.items()):
            writes.append(
                PendingWrite(
                    RecordType.TRANSITION,
                    f"{source}->{target}",
                    count * weight,
                    {"from": source, "to": target, "order": order},
                )
            )

        writes.append(
            PendingWrite(RecordType.TEMPORAL, f"{hour}|{phrase}", 1, {"phrase": phrase, "hour": hour})
        )
        for topic in topics:
            writes.append(
                PendingWrite(RecordType.TOPIC, f"{topic}|{phrase}", 1, {"topic": topic, "phrase": phrase})
            )
        return writes

    async def record_utterance(
        self,
        text: str | Iterable[str],
        category: str | None = None,
        *,
        now: datetime | None = None,
    ) -> None:
        tokens = tokenize(text)
        if not tokens:
            return
        now = _aware(now) if now is not None else _local_now()
        async with self._lock:
            writes = self._build_writes(tokens, category, now)
            await self._apply(writes)
        logger.debug(f"Recorded utterance {' '.join(tokens)!r} ({len(writes)} writes)")

    async def track_embedding(
        self,
        phrase: str | Iterable[str],
        semantic_category: str,
        related_phrases: Iterable[str],
        *,
        now: datetime | None = None,
    ) -> None:
        """Remember that ``related_phrases`` were chosen after ``phrase``."""
        key_phrase = " ".join(tokenize(phrase))
        related = tuple(dict.fromkeys(p.strip().lower() for p in related_phrases if p and p.strip()))
        if not key_phrase or not related:
            return
        now = _aware(now) if now is not None else _local_now()
        write = PendingWrite(
            RecordType.EMBEDDING,
            f"{semantic_category}|{key_phrase}",
            1,
            {"phrase": key_phrase, "semantic_category": semantic_category, "last_used_at": now},
            add_to_set={"related_phrases": related},
        )
        async with self._lock:
            await self._apply([write])

    async def track_correction(
        self,
        suggested: str,
        actual: str,
        context_words: Iterable[str] | None = None,
        *,
        now: datetime | None = None,
    ) -> None:
        """Record that ``suggested`` was replaced by ``actual`` and trust it less."""
        suggested, actual = (suggested or "").strip().lower(), (actual or "").strip().lower()
        if not suggested or not actual or suggested == actual:
            return
        now = _aware(now) if now is not None else _local_now()
        writes = [
            PendingWrite(
                RecordType.CORRECTION,
                f"{suggested}->{actual}",
                1,
                {"suggested": suggested, "actual": actual, "last_corrected_at": now},
                add_to_set={"contexts": (context_key(context_words),)},
            ),
            PendingWrite(
                RecordType.WORD,
                suggested,
                0,
                {"confidence": CORRECTED_WORD_CONFIDENCE, "last_corrected_at": now},
            ),
        ]
        async with self._lock:
            await self._apply(writes)
        logger.debug(f"Tracked correction {suggested!r} -> {actual!r}")

    async def _apply(self, writes: list[PendingWrite]) -> None:
        """Update the snapshot, then write through or defer. Caller holds the lock."""
        for write in writes:
            self._snapshot.merge(
                write.record_type,
                write.key,
                write.frequency_delta,
                {**write.metadata, **write.add_to_set},
            )
        if not await self._queue.submit(self._backend, writes):
            self._snapshot.degraded = True

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def sweep(self, retention_days: int | None = None) -> int:
        """Delete rarely used records that have not been touched recently."""
        days = retention_days if retention_days is not None else self._settings.retention_days
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        stale = {"updated_at": {"$lt": cutoff}, "frequency": {"$lt": 2}}
        removed = 0
        async with self._lock:
            stale_words = [doc["key"] for doc in await self._backend.query(RecordType.WORD, stale)]
            for record_type in (
                RecordType.WORD,
                RecordType.PHRASE,
                RecordType.TEMPORAL,
                RecordType.TOPIC,
                RecordType.EMBEDDING,
                RecordType.CORRECTION,
            ):
                removed += await self._backend.delete(record_type, stale)
            if stale_words:
                removed += await self._backend.delete(
                    RecordType.TRANSITION,
                    {"metadata.from": {"$in": stale_words}, "metadata.to": {"$in": stale_words}},
                )
        if removed:
            logger.info(f"Retention sweep removed {removed} records")
            await self.load()
        return removed

    async def reset(self) -> None:
        async with self._lock:
            self._queue.clear()
            for record_type in _SNAPSHOT_TYPES:
                await self._backend.delete(record_type)
            self._snapshot = PatternSnapshot()
        logger.info("Pattern store reset")
