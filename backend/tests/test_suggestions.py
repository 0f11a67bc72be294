"""End-to-end tests for the suggestion engine."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from aac_engine.config import Settings
from aac_engine.engine import SuggestionEngine
from aac_engine.memory.store import InMemoryPatternBackend, RecordType, StoreUnavailableError
from aac_engine.models.patterns import IntentType
from aac_engine.models.suggestions import Suggestion, SuggestionType
from aac_engine.suggest.similarity import are_similar

VOCABULARY = ["water", "play", "home", "juice", "mum", "park"]


class SlowBackend(InMemoryPatternBackend):
    """In-memory backend whose reads take ``delay`` seconds."""

    def __init__(self, delay: float, scope: str = "default") -> None:
        super().__init__(scope)
        self.delay = delay
        self.available = True

    async def ping(self) -> bool:
        return self.available

    async def query(self, record_type: RecordType, filter: dict[str, Any] | None = None, order_by: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        await asyncio.sleep(self.delay)
        if not self.available:
            raise StoreUnavailableError("store offline")
        return await super().query(record_type, filter, order_by, limit)


def _texts(suggestions: list[Suggestion]) -> list[str]:
    return [s.text.lower() for s in suggestions]


def _similar_pairs(suggestions: list[Suggestion]) -> list[tuple[str, str]]:
    texts = _texts(suggestions)
    return [
        (first, second)
        for i, first in enumerate(texts)
        for second in texts[i + 1 :]
        if are_similar(first, second)
    ]


@pytest.mark.asyncio
async def test_cold_start_returns_starters(engine: SuggestionEngine) -> None:
    suggestions = await engine.get_suggestions([])
    assert 0 < len(suggestions) <= 10
    assert all(s.text.strip() for s in suggestions)
    assert all(0.0 <= s.confidence <= 1.0 for s in suggestions)
    assert await engine.get_suggestions(None) == suggestions


@pytest.mark.asyncio
async def test_results_are_deterministic_and_unique(engine: SuggestionEngine) -> None:
    first = await engine.get_suggestions(["I", "want"], VOCABULARY)
    second = await engine.get_suggestions(["I", "want"], VOCABULARY)
    assert first == second
    texts = _texts(first)
    assert len(texts) == len(set(texts))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "words, vocabulary, category, category_vocabulary",
    [
        ([], None, None, None),
        ([], VOCABULARY, None, None),
        (["I", "want"], VOCABULARY, None, None),
        (["I", "feel"], ["happy", "sad", "angry", "tired", "good"], None, None),
        (["I", "want"], VOCABULARY, "food", ["apple", "pizza", "water", "juice", "banana"]),
        (["where", "is"], ["mum", "dad", "park", "home", "school"], None, None),
    ],
)
async def test_no_two_suggestions_are_similar(
    engine: SuggestionEngine,
    words: list[str],
    vocabulary: list[str] | None,
    category: str | None,
    category_vocabulary: list[str] | None,
) -> None:
    suggestions = await engine.get_suggestions(words, vocabulary, 10, category, category_vocabulary)
    assert suggestions
    assert _similar_pairs(suggestions) == []


@pytest.mark.asyncio
async def test_no_two_suggestions_are_similar_after_learning(engine: SuggestionEngine) -> None:
    for text in ("I want water", "I want juice", "I want to play", "I want to go home"):
        await engine.record_utterance(text)
    juice = Suggestion(text="juice", confidence=0.4, type=SuggestionType.CONTEXTUAL)
    await engine.on_suggestion_selected(juice, ["i", "want"])

    for words in ([], ["I"], ["I", "want"], ["I", "want", "to"]):
        suggestions = await engine.get_suggestions(words, VOCABULARY)
        assert _similar_pairs(suggestions) == []


@pytest.mark.asyncio
async def test_max_suggestions_is_respected(engine: SuggestionEngine) -> None:
    assert len(await engine.get_suggestions(["I"], VOCABULARY, max_suggestions=3)) <= 3
    assert await engine.get_suggestions(["I"], VOCABULARY, max_suggestions=0) == []


@pytest.mark.asyncio
async def test_i_want_offers_completions_before_fallback(engine: SuggestionEngine) -> None:
    texts = _texts(await engine.get_suggestions(["I", "want"], ["water", "play", "home"]))
    assert any(word in texts[:3] for word in ("to", "water", "some"))
    if "home" in texts:
        best = min(texts.index(w) for w in ("to", "water", "some") if w in texts)
        assert best < texts.index("home")


@pytest.mark.asyncio
async def test_current_words_are_not_repeated(engine: SuggestionEngine) -> None:
    texts = _texts(await engine.get_suggestions(["I", "want"], VOCABULARY))
    assert "want" not in texts
    assert "i" not in texts


@pytest.mark.asyncio
async def test_learned_phrase_surfaces_in_top_three(engine: SuggestionEngine) -> None:
    for _ in range(3):
        await engine.record_utterance("I want water")
    suggestions = await engine.get_suggestions(["I", "want"], ["play", "home"])
    assert "water" in _texts(suggestions)[:3]


@pytest.mark.asyncio
async def test_temporal_starters_on_empty_input(engine: SuggestionEngine) -> None:
    now = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)
    for _ in range(4):
        await engine.record_utterance("breakfast please", now=now)
    suggestions = await engine.get_suggestions([], now=now + timedelta(hours=1))
    temporal = [s for s in suggestions if s.type == SuggestionType.TEMPORAL]
    assert [s.text for s in temporal] == ["breakfast"]


@pytest.mark.asyncio
async def test_category_vocabulary_is_boosted(engine: SuggestionEngine) -> None:
    suggestions = await engine.get_suggestions(
        ["I", "want"],
        VOCABULARY,
        category="food",
        category_vocabulary=["apple", "pizza", "ball"],
    )
    category = [s for s in suggestions if s.type == SuggestionType.CATEGORY_CONTEXTUAL]
    assert category
    assert all(s.context == "category:food" for s in category)
    assert "ball" not in [s.text for s in category]


@pytest.mark.asyncio
async def test_selected_suggestions_are_personalised(engine: SuggestionEngine) -> None:
    juice = Suggestion(text="juice", confidence=0.4, type=SuggestionType.CONTEXTUAL)
    for _ in range(3):
        await engine.on_suggestion_selected(juice, ["i", "want"])

    suggestions = await engine.get_suggestions(["I", "want"], VOCABULARY)
    by_text = {s.text: s for s in suggestions}
    assert "juice" in by_text
    assert by_text["juice"].type == SuggestionType.PERSONALIZED
    assert engine.intents.distribution() == {IntentType.DESIRE.value: 3}


@pytest.mark.asyncio
async def test_ignored_suggestions_are_counted(engine: SuggestionEngine) -> None:
    ignored = [
        Suggestion(text="park", confidence=0.3, type=SuggestionType.CONTEXTUAL),
        Suggestion(text="mum", confidence=0.3, type=SuggestionType.CONTEXTUAL),
    ]
    await engine.on_suggestions_ignored(ignored, ["i", "want"])
    stats = engine.get_learning_statistics()
    assert stats.total_interactions == 2
    assert stats.selection_rate == 0.0
    assert {w.word for w in stats.top_ignored_words} == {"park", "mum"}


@pytest.mark.asyncio
async def test_sentence_completion_predicts_next_intent(engine: SuggestionEngine) -> None:
    start = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
    thanks = Suggestion(text="you", confidence=0.5, type=SuggestionType.COMPLETION)
    await engine.on_suggestion_selected(thanks, ["thank"])

    await engine.on_sentence_completed("I want water", now=start)
    await engine.on_sentence_completed("thank you", now=start + timedelta(seconds=5))
    await engine.on_sentence_completed("I want juice", now=start + timedelta(seconds=30))
    await engine.on_sentence_completed("thanks", now=start + timedelta(seconds=45))
    predictions = await engine.on_sentence_completed("I need a break", now=start + timedelta(seconds=90))

    assert predictions[0].intent == IntentType.THANKS
    assert predictions[0].confidence == pytest.approx(0.2)
    assert engine.next_intentions == ["you"]
    desire_to_thanks = next(
        s for s in engine.intents.sequences if s.first_intent == IntentType.DESIRE
    )
    assert desire_to_thanks.average_gap_seconds == pytest.approx(10.0)
    assert "i want water" in engine.patterns.snapshot.phrases


@pytest.mark.asyncio
async def test_blank_sentence_is_ignored(engine: SuggestionEngine) -> None:
    assert await engine.on_sentence_completed("   ") == []
    assert engine.intents.sequences == []


@pytest.mark.asyncio
async def test_learning_statistics_and_reset(engine: SuggestionEngine) -> None:
    await engine.record_utterance("I want water")
    await engine.record_utterance("I want water")
    water = Suggestion(text="water", confidence=0.8, type=SuggestionType.NEXT_WORD)
    await engine.on_suggestion_selected(water, ["i", "want"])

    stats = engine.get_learning_statistics()
    assert stats.total_interactions == 1
    assert stats.intent_distribution == {"desire": 1}
    assert [(s.word, s.count) for s in stats.frequent_sentences] == [("i want water", 2)]

    await engine.reset()
    cleared = engine.get_learning_statistics()
    assert cleared.total_interactions == 0
    assert cleared.frequent_sentences == []
    assert engine.patterns.snapshot.phrases == {}
    assert await engine.backend.query(RecordType.PHRASE) == []


@pytest.mark.asyncio
async def test_outage_degrades_to_static_suggestions(engine: SuggestionEngine) -> None:
    engine.backend.available = False
    await engine.record_utterance("I want water")
    suggestions = await engine.get_suggestions(["I", "want"], VOCABULARY)
    assert suggestions
    status = await engine.status()
    assert status["store"] == "unavailable"
    assert status["degraded"]
    assert status["pending_writes"] > 0

    engine.backend.available = True
    assert await engine.flush() > 0
    assert engine.pending_writes == 0
    assert [doc["key"] for doc in await engine.backend.query(RecordType.PHRASE)] == ["i want water"]


@pytest.mark.asyncio
async def test_unavailable_store_at_startup(test_settings: Settings) -> None:
    backend = SlowBackend(delay=0.0)
    backend.available = False
    engine = SuggestionEngine(backend, settings=test_settings)
    await engine.initialize()
    try:
        assert await engine.get_suggestions(["I", "want"], VOCABULARY)
    finally:
        await engine.close()


@pytest.mark.asyncio
async def test_slow_store_falls_back_to_templates() -> None:
    settings = Settings(_env_file=None, store_timeout_seconds=0.05)
    engine = SuggestionEngine(SlowBackend(delay=0.5), settings=settings)
    suggestions = await engine.get_suggestions(["I", "want"], VOCABULARY)
    assert "to" in _texts(suggestions)


@pytest.mark.asyncio
async def test_newer_query_supersedes_older_one(test_settings: Settings) -> None:
    """A query still waiting on the store is discarded once newer input arrives."""
    engine = SuggestionEngine(SlowBackend(delay=0.05), settings=test_settings)
    stale = asyncio.create_task(engine.get_suggestions(["I"], VOCABULARY))
    await asyncio.sleep(0.01)
    fresh = await engine.get_suggestions(["I", "want"], VOCABULARY)

    assert await stale == []
    assert fresh
    assert "to" in _texts(fresh)


@pytest.mark.asyncio
async def test_grammar_and_variations_through_engine(engine: SuggestionEngine) -> None:
    result = engine.check_grammar(["he", "want"])
    assert result.best_correction is not None
    assert result.best_correction.corrected == "he wants"

    variations = engine.word_variations("Went")
    assert variations.word == "went"
    assert variations.base_form == "go"
    assert engine.word_variations("play").is_verb
    assert engine.check_grammar(None).best_correction is None



@pytest.mark.asyncio
async def test_correction_lowers_confidence_and_offers_replacement(engine: SuggestionEngine) -> None:
    before = {s.text: s for s in await engine.get_suggestions(["I", "want"], VOCABULARY, max_suggestions=20)}
    await engine.on_suggestion_corrected("water", "juice", ["I", "want"])

    after = {s.text: s for s in await engine.get_suggestions(["I", "want"], VOCABULARY, max_suggestions=20)}
    assert after["water"].confidence == pytest.approx(before["water"].confidence * 0.5)
    assert after["juice"].context == "correction:water"
    assert after["juice"].type == SuggestionType.NEXT_WORD


@pytest.mark.asyncio
async def test_selection_records_related_phrases(engine: SuggestionEngine) -> None:
    juice = Suggestion(text="Juice", confidence=0.4, type=SuggestionType.CONTEXTUAL)
    await engine.on_suggestion_selected(juice, ["I", "want"])
    await engine.on_suggestion_selected(juice, [])

    assert list(engine.patterns.snapshot.embeddings) == ["desire|i want"]
    assert engine.related_phrases(["I", "want"]) == ["juice"]

    now = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
    candidates = await engine.aggregator.learned_candidates(["i"], [], now)
    assert ("juice", "semantic") in {(c.text, c.context) for c in candidates}


@pytest.mark.asyncio
async def test_vocabulary_and_word_pairs_through_engine(engine: SuggestionEngine) -> None:
    start = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)
    for day in range(3):
        await engine.record_utterance("I want water", now=start + timedelta(days=2 * day))

    analysis = engine.analyze_vocabulary()
    assert analysis.total_words == 3
    assert analysis.preferred_sentence_length == pytest.approx(3.0)
    assert [(p.from_word, p.to_word) for p in engine.confident_word_pairs()] == [("i", "want"), ("want", "water")]
    assert engine.confident_word_pairs(min_frequency=5) == []
