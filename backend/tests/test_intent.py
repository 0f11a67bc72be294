"""Tests for intent classification and the learned intent store."""

import pytest

from aac_engine.config import Settings
from aac_engine.language.intent import classify
from aac_engine.memory.intents import IntentStore
from aac_engine.memory.store import InMemoryPatternBackend
from aac_engine.models.patterns import IntentType


@pytest.mark.parametrize(
    "utterance, expected",
    [
        ("I want to feel happy", IntentType.DESIRE),
        ("I need help", IntentType.DESIRE),
        ("I feel sad", IntentType.EMOTION),
        ("where is my bag", IntentType.QUESTION),
        ("can you help me", IntentType.QUESTION),
        ("please help me", IntentType.REQUEST),
        ("hello there", IntentType.GREETING),
        ("thank you", IntentType.THANKS),
        ("this is nice", IntentType.STATEMENT),
        ("", IntentType.STATEMENT),
    ],
)
def test_classify(utterance: str, expected: IntentType) -> None:
    assert classify(utterance) == expected


def test_classify_accepts_word_lists() -> None:
    assert classify(["I", "Want", "water"]) == IntentType.DESIRE
    assert classify(None) == IntentType.STATEMENT


@pytest.mark.asyncio
async def test_record_pattern_confidence_grows(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    """Each recurrence adds the configured increment, capped at 1.0."""
    store = IntentStore(backend, test_settings)
    first = await store.record_pattern(["I", "want"], "water")
    assert first is not None
    assert first.confidence == pytest.approx(0.5)

    await store.record_pattern(["i", "want"], "juice")
    third = await store.record_pattern(["i", "want"], "water")
    assert third.frequency == 3
    assert third.confidence == pytest.approx(0.6)
    assert third.common_completions == ["water", "juice"]

    for _ in range(20):
        await store.record_pattern(["i", "want"], "water")
    assert store.patterns[0].confidence == 1.0


@pytest.mark.asyncio
async def test_record_pattern_ignores_empty_context(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = IntentStore(backend, test_settings)
    assert await store.record_pattern([], "water") is None
    assert await store.record_pattern(["i"], "  ") is None
    assert store.patterns == []


@pytest.mark.asyncio
async def test_record_transition_averages_gap(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = IntentStore(backend, test_settings)
    await store.record_transition("I want water", "thank you", 10)
    sequence = await store.record_transition("I need a drink", "thanks", 20)
    assert sequence.first_intent == IntentType.DESIRE
    assert sequence.second_intent == IntentType.THANKS
    assert sequence.frequency == 2
    assert sequence.average_gap_seconds == pytest.approx(15.0)


@pytest.mark.asyncio
async def test_predict_next(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = IntentStore(backend, test_settings)
    await store.record_transition("I want water", "thank you", 5)
    await store.record_transition("I want juice", "thanks", 5)
    await store.record_transition("I want juice", "where is mum", 5)
    await store.record_pattern(["thank"], "you")

    predictions = store.predict_next("I need a break")
    assert [p.intent for p in predictions] == [IntentType.THANKS, IntentType.QUESTION]
    assert predictions[0].confidence == pytest.approx(0.2)
    assert predictions[0].example_completions == ["you"]
    assert predictions[1].confidence == pytest.approx(0.1)
    assert store.predict_next("hello") == []


@pytest.mark.asyncio
async def test_distribution_and_completions(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = IntentStore(backend, test_settings)
    await store.record_pattern(["i", "want"], "water")
    await store.record_pattern(["i", "want"], "juice")
    await store.record_pattern(["i", "feel"], "happy")

    assert store.distribution() == {"desire": 2, "emotion": 1}
    completions = [text for text, _ in store.completions_for(["i", "need"])]
    assert completions == ["water", "juice"]
    assert store.completions_for([]) == []


@pytest.mark.asyncio
async def test_load_restores_state_and_skips_malformed(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = IntentStore(backend, test_settings)
    await store.record_pattern(["i", "want"], "water")
    await store.record_transition("I want water", "thank you", 10)
    await store.record_transition("I want juice", "thanks", 30)
    await backend.upsert("intent_pattern", "broken", 1, {"intent_type": "shouting"})

    reloaded = IntentStore(backend, test_settings)
    await reloaded.load()
    assert len(reloaded.patterns) == 1
    assert reloaded.patterns[0].common_completions == ["water"]
    assert reloaded.sequences[0].average_gap_seconds == pytest.approx(20.0)


@pytest.mark.asyncio
async def test_writes_deferred_while_store_is_down(backend: InMemoryPatternBackend, test_settings: Settings) -> None:
    store = IntentStore(backend, test_settings)
    backend.available = False
    await store.record_pattern(["i", "want"], "water")
    assert store.pending_writes == 1
    assert store.distribution() == {"desire": 1}

    backend.available = True
    assert await store.flush() == 1
    assert store.pending_writes == 0
    assert len(await backend.query("intent_pattern")) == 1
