"""Tests for the pattern store: recording, snapshot lookups, outages and retention."""

from datetime import datetime, timedelta, timezone

import pytest

from aac_engine.config import Settings
from aac_engine.memory.patterns import PatternStore
from aac_engine.memory.store import InMemoryPatternBackend, RecordType
from aac_engine.models.patterns import VocabularyAnalysis

MORNING = datetime(2026, 3, 2, 8, 15, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_record_utterance_updates_snapshot(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", category="food", now=MORNING)

    snapshot = store.snapshot
    phrase = snapshot.phrases["i want water"]
    assert phrase.frequency == 1
    assert phrase.hour_of_day == 8
    assert phrase.day_of_week == 0
    assert phrase.category == "food"
    assert "food" in phrase.topics
    assert snapshot.word_frequency("Water") == 1
    assert snapshot.word_used_at_hour("want", 8)
    assert snapshot.transitions["want"] == {"water": 1.0}
    assert snapshot.transitions["i want"] == {"water": 1.0}
    assert snapshot.topic_phrases("food") == [("i want water", 1.0)]


@pytest.mark.asyncio
async def test_record_utterance_persists_records(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)

    transitions = {doc["key"]: doc for doc in await backend.query(RecordType.TRANSITION)}
    assert set(transitions) == {"i->want", "want->water", "i want->water"}
    assert transitions["i want->water"]["metadata"]["order"] == 2
    temporal = await backend.query(RecordType.TEMPORAL)
    assert [doc["key"] for doc in temporal] == ["8|i want water"]


@pytest.mark.asyncio
async def test_empty_utterance_is_ignored(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("   ", now=MORNING)
    await store.record_utterance([], now=MORNING)
    assert store.snapshot.phrases == {}
    assert await backend.query(RecordType.PHRASE) == []


@pytest.mark.asyncio
async def test_recent_repetition_weights_transitions(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    """A phrase repeated inside the recency window counts more than a stale one."""
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)
    await store.record_utterance("I want water", now=MORNING + timedelta(hours=48))
    assert store.snapshot.transitions["want"]["water"] == pytest.approx(2.0)

    await store.record_utterance("I want water", now=MORNING + timedelta(hours=49))
    assert store.snapshot.transitions["want"]["water"] == pytest.approx(3.5)


@pytest.mark.asyncio
async def test_phrase_lookups(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    for _ in range(3):
        await store.record_utterance("I want water", now=MORNING)
    await store.record_utterance("I want to play", now=MORNING)
    snapshot = store.snapshot

    assert snapshot.phrase_remainders(["i", "want"]) == [("water", 3)]
    assert snapshot.phrase_continuations(["i", "want"]) == [("water", 3), ("to", 1)]
    assert snapshot.next_words(["i", "want"])[0][0] == "water"
    assert snapshot.next_words([]) == []
    assert [r.text for r in snapshot.top_phrases(1)] == ["i want water"]


@pytest.mark.asyncio
async def test_bigram_edges_are_down_weighted(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("we want juice", now=MORNING)
    await store.record_utterance("I want water", now=MORNING + timedelta(days=3))

    weights = dict(store.snapshot.next_words(["i", "want"]))
    assert weights["water"] == pytest.approx(1.0)
    assert weights["juice"] == pytest.approx(0.7)


@pytest.mark.asyncio
async def test_phrases_near_hour_wraps_midnight(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("good night", now=MORNING.replace(hour=23))
    await store.record_utterance("good morning", now=MORNING)

    assert [p for p, _ in store.snapshot.phrases_near_hour(1)] == ["good night"]
    assert [p for p, _ in store.snapshot.phrases_near_hour(9)] == ["good morning"]
    assert store.snapshot.phrases_near_hour(15) == []


@pytest.mark.asyncio
async def test_load_rebuilds_snapshot(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    writer = PatternStore(backend, test_settings)
    await writer.record_utterance("I want water", now=MORNING)
    await writer.record_utterance("I want water", now=MORNING)

    reader = PatternStore(backend, test_settings)
    snapshot = await reader.load()
    assert snapshot.phrases["i want water"].frequency == 2
    assert snapshot.transitions["want"]["water"] == pytest.approx(2.5)
    assert snapshot.word_used_at_hour("water", 8)
    assert reader.load_all()["phrases"] is snapshot.phrases


@pytest.mark.asyncio
async def test_load_skips_malformed_records(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)
    await backend.upsert(RecordType.TRANSITION, "broken", 1, {"from": "want"})
    await backend.upsert(RecordType.TEMPORAL, "99|i want water", 1, {"phrase": "i want water", "hour": 99})
    await backend.upsert(RecordType.PHRASE, "bad hour", 1, {"hour_of_day": 40})

    snapshot = await PatternStore(backend, test_settings).load()
    assert "bad hour" not in snapshot.phrases
    assert "i want water" in snapshot.phrases
    assert snapshot.transitions["want"] == {"water": 1.0}
    assert set(snapshot.temporal["i want water"]) == {8}


@pytest.mark.asyncio
async def test_outage_defers_writes_then_flushes(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    backend.available = False
    await store.record_utterance("I want water", now=MORNING)

    assert store.snapshot.phrases["i want water"].frequency == 1
    assert store.snapshot.degraded
    assert store.pending_writes > 0

    backend.available = True
    written = await store.flush()
    assert written > 0
    assert store.pending_writes == 0
    assert not store.snapshot.degraded
    assert [doc["key"] for doc in await backend.query(RecordType.PHRASE)] == ["i want water"]


@pytest.mark.asyncio
async def test_load_during_outage_keeps_snapshot(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)
    backend.available = False

    snapshot = await store.load()
    assert snapshot.degraded
    assert "i want water" in snapshot.phrases


@pytest.mark.asyncio
async def test_sweep_removes_rare_stale_records(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)
    await store.record_utterance("I want water", now=MORNING)
    await store.record_utterance("go home", now=MORNING)

    # A negative window puts the cutoff in the future, so every record is stale.
    removed = await store.sweep(retention_days=-1)
    assert removed > 0

    phrases = {doc["key"] for doc in await backend.query(RecordType.PHRASE)}
    words = {doc["key"] for doc in await backend.query(RecordType.WORD)}
    transitions = {doc["key"] for doc in await backend.query(RecordType.TRANSITION)}
    assert phrases == {"i want water"}
    assert words == {"i", "want", "water"}
    assert "go->home" not in transitions
    assert "want->water" in transitions
    assert "go home" not in store.snapshot.phrases


@pytest.mark.asyncio
async def test_sweep_keeps_recent_records(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("go home", now=MORNING)
    assert await store.sweep(retention_days=90) == 0
    assert "go home" in store.snapshot.phrases


@pytest.mark.asyncio
async def test_reset_clears_everything(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)
    await store.reset()

    assert store.snapshot.phrases == {}
    assert store.snapshot.transitions == {}
    for record_type in (RecordType.WORD, RecordType.PHRASE, RecordType.TRANSITION):
        assert await backend.query(record_type) == []


@pytest.mark.asyncio
async def test_analyze_vocabulary(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    assert store.snapshot.analyze_vocabulary() == VocabularyAnalysis()

    await store.record_utterance("I want water", now=MORNING)
    await store.record_utterance("I want water", now=MORNING)
    await store.record_utterance("go home", now=MORNING)

    analysis = store.snapshot.analyze_vocabulary()
    assert analysis.total_words == 5
    assert analysis.average_word_length == pytest.approx(16 / 5)
    assert analysis.most_common_words == ["i", "want", "water", "go", "home"]
    assert analysis.preferred_sentence_length == pytest.approx(2.5)
    assert analysis.vocabulary_diversity == pytest.approx(5 / 8)


@pytest.mark.asyncio
async def test_confident_word_pairs(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    for day in range(3):
        await store.record_utterance("I want water", now=MORNING + timedelta(days=2 * day))
    await store.record_utterance("go home", now=MORNING)

    pairs = store.snapshot.confident_word_pairs()
    assert [(p.from_word, p.to_word) for p in pairs] == [("i", "want"), ("want", "water")]
    assert all(p.frequency == pytest.approx(3.0) for p in pairs)
    assert all(p.confidence == pytest.approx(0.3) for p in pairs)
    assert ("go", "home") in {(p.from_word, p.to_word) for p in store.snapshot.confident_word_pairs(1)}


@pytest.mark.asyncio
async def test_track_embedding_and_related_phrases(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.track_embedding(["i", "want"], "desire", ["juice"], now=MORNING)
    await store.track_embedding("I want", "desire", ["Water", "juice"], now=MORNING)
    await store.track_embedding("i need", "desire", ["help"], now=MORNING)
    await store.track_embedding("i need", "desire", [], now=MORNING)

    snapshot = store.snapshot
    assert snapshot.related_phrases("i want") == ["juice", "water"]
    assert snapshot.related_phrases("want") == ["juice", "water"]
    assert snapshot.related_phrases("juice") == ["juice", "water"]
    assert snapshot.related_phrases("i") == ["juice", "water", "help"]
    assert snapshot.related_phrases("i", limit=1) == ["juice"]
    assert snapshot.related_phrases("  ") == []

    docs = {doc["key"]: doc for doc in await backend.query(RecordType.EMBEDDING)}
    assert set(docs) == {"desire|i want", "desire|i need"}
    assert docs["desire|i want"]["frequency"] == 2
    assert docs["desire|i want"]["metadata"]["related_phrases"] == ["juice", "water"]

    reader = PatternStore(backend, test_settings)
    await reader.load()
    assert reader.snapshot.related_phrases("i want") == ["juice", "water"]
    assert reader.snapshot.embeddings["desire|i want"].usage_count == 2


@pytest.mark.asyncio
async def test_track_correction_lowers_word_confidence(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    await store.record_utterance("I want water", now=MORNING)
    await store.track_correction("Water", "juice", ["I", "want"], now=MORNING)
    await store.track_correction("water", "Water", ["i", "want"], now=MORNING)

    snapshot = store.snapshot
    assert snapshot.word_confidence("water") == pytest.approx(0.5)
    assert snapshot.word_confidence("juice") == 1.0
    assert snapshot.word_frequency("water") == 1
    [correction] = snapshot.corrections_for("i want")
    assert (correction.suggested, correction.actual, correction.frequency) == ("water", "juice", 1)
    assert snapshot.corrections_for("i need") == []
    assert [doc["key"] for doc in await backend.query(RecordType.CORRECTION)] == ["water->juice"]

    reader = PatternStore(backend, test_settings)
    await reader.load()
    assert reader.snapshot.word_confidence("water") == pytest.approx(0.5)
    assert [c.actual for c in reader.snapshot.corrections_for("i want")] == ["juice"]


@pytest.mark.asyncio
async def test_corrections_are_deferred_during_outage(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = PatternStore(backend, test_settings)
    backend.available = False
    await store.track_correction("water", "juice", ["i", "want"], now=MORNING)
    assert store.snapshot.word_confidence("water") == pytest.approx(0.5)
    assert store.pending_writes == 2

    backend.available = True
    assert await store.flush() == 2
    assert [doc["key"] for doc in await backend.query(RecordType.CORRECTION)] == ["water->juice"]
