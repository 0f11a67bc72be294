"""Tests for similarity, synonyms and candidate ranking."""

import pytest

from aac_engine.models.suggestions import SuggestionType
from aac_engine.suggest.ranking import Candidate, merge_candidates, rank, select
from aac_engine.suggest.similarity import are_similar, category_members, synonyms


@pytest.mark.parametrize(
    "a, b",
    [
        ("water", "Water"),
        ("want", "wants"),
        ("play", "played"),
        ("go", "went"),
        ("happy", "sad"),
        ("house", "horse"),
        ("thanks", "thank you"),
        ("to", "go"),
        ("i", "is"),
        ("the", "she"),
        ("cat", "car"),
        ("like", "love"),
        ("a", "my"),
    ],
)
def test_similar_pairs(a: str, b: str) -> None:
    assert are_similar(a, b)


@pytest.mark.parametrize(
    "a, b",
    [
        ("water", "play"),
        ("juice", "school"),
        ("help", "ready"),
        ("to", "water"),
    ],
)
def test_dissimilar_pairs(a: str, b: str) -> None:
    assert not are_similar(a, b)


def test_synonyms_direct_and_reverse() -> None:
    assert synonyms("want") == ["need", "like", "wish"]
    assert "happy" in synonyms("glad")
    assert synonyms("want", ["need", "water"]) == ["need"]
    assert synonyms("zorblax") == []


def test_category_members_filtered_to_vocabulary() -> None:
    assert category_members("happy", ["sad", "water", "Angry", "happy"]) == ["sad", "angry"]
    assert category_members("water", ["sad"]) == []


def test_merge_candidates_rewards_agreement() -> None:
    merged = merge_candidates(
        [
            Candidate("water", 0.5, SuggestionType.NEXT_WORD),
            Candidate("Water", 0.7, SuggestionType.COMMON_PHRASE),
            Candidate("juice", 0.4, SuggestionType.CONTEXTUAL),
            Candidate("  ", 0.9, SuggestionType.CONTEXTUAL),
        ]
    )
    assert [c.key for c in merged] == ["water", "juice"]
    water = merged[0]
    assert water.sources == 2
    assert water.confidence == pytest.approx(0.8)
    assert water.type == SuggestionType.COMMON_PHRASE


def test_rank_orders_by_score_then_type_then_gathering_order() -> None:
    ranked = rank(
        [
            Candidate("zebra", 0.5, SuggestionType.CONTEXTUAL),
            Candidate("apple", 0.5, SuggestionType.CONTEXTUAL),
            Candidate("juice", 0.5, SuggestionType.PERSONALIZED),
        ],
        tokens=[],
    )
    assert [item.candidate.key for item in ranked] == ["juice", "zebra", "apple"]


def test_rank_uses_frequency_and_completeness() -> None:
    ranked = rank(
        [
            Candidate("juice", 0.5, SuggestionType.NEXT_WORD),
            Candidate("water", 0.5, SuggestionType.NEXT_WORD),
        ],
        tokens=["i", "want"],
        frequency=lambda word: 4 if word == "water" else 0,
    )
    assert ranked[0].candidate.key == "water"
    assert ranked[0].score == pytest.approx(0.5 + 0.2 + 0.2 + 0.2)


def test_select_skips_similar_candidates() -> None:
    ranked = rank(
        [
            Candidate("happy", 0.9, SuggestionType.NEXT_WORD),
            Candidate("sad", 0.8, SuggestionType.NEXT_WORD),
            Candidate("water", 0.7, SuggestionType.NEXT_WORD),
            Candidate("waters", 0.6, SuggestionType.NEXT_WORD),
            Candidate("play", 0.5, SuggestionType.NEXT_WORD),
        ],
        tokens=[],
    )
    assert [item.candidate.key for item in select(ranked, 10)] == ["happy", "water", "play"]
    assert [item.candidate.key for item in select(ranked, 2)] == ["happy", "water"]
    assert select(ranked, 0) == []
