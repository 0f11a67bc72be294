"""Lexical variation lookup endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.suggestions import WordVariations

router = APIRouter()


@router.get("/{word}/variations", response_model=WordVariations)
async def word_variations(
    word: str,
    engine: SuggestionEngine = Depends(get_engine),
) -> WordVariations:
    """Inflected forms, base form and likely word classes of ``word``."""
    return engine.word_variations(word)
