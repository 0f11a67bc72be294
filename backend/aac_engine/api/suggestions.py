"""Suggestion query endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.suggestions import SuggestionRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("")
async def get_suggestions(
    request: SuggestionRequest,
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, Any]:
    """Return ranked suggestions for the utterance being composed."""
    suggestions = await engine.get_suggestions(
        request.current_words,
        request.available_words,
        request.max_suggestions,
        request.category,
        request.category_vocabulary,
    )
    return {"suggestions": suggestions, "count": len(suggestions)}
