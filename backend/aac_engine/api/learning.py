"""Learning statistics and reset endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.patterns import VocabularyAnalysis, WordPair
from aac_engine.models.preferences import LearningStatistics

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/statistics", response_model=LearningStatistics)
async def learning_statistics(
    engine: SuggestionEngine = Depends(get_engine),
) -> LearningStatistics:
    """Return selection rates, top words and intent distribution."""
    return engine.get_learning_statistics()


@router.get("/vocabulary", response_model=VocabularyAnalysis)
async def vocabulary_analysis(
    engine: SuggestionEngine = Depends(get_engine),
) -> VocabularyAnalysis:
    """Summarise the words and sentence lengths the user has produced."""
    return engine.analyze_vocabulary()


@router.get("/word-pairs", response_model=list[WordPair])
async def word_pairs(
    min_frequency: float = Query(default=3, ge=0),
    engine: SuggestionEngine = Depends(get_engine),
) -> list[WordPair]:
    """Word transitions the user relies on often."""
    return engine.confident_word_pairs(min_frequency)


@router.delete("")
async def reset_learning(
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, str]:
    """Forget everything learned for the configured identity scope."""
    await engine.reset()
    logger.info("Learned data cleared via API")
    return {"status": "cleared"}
