"""Suggestion feedback endpoints: selections, ignored suggestions and corrections."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.suggestions import CorrectionRequest, IgnoredRequest, SelectionRequest

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/selected")
async def suggestion_selected(
    request: SelectionRequest,
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, str]:
    """Record that the user picked a suggestion."""
    await engine.on_suggestion_selected(request.suggestion, request.context_words, request.category)
    return {"status": "recorded"}


@router.post("/ignored")
async def suggestions_ignored(
    request: IgnoredRequest,
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, object]:
    """Record suggestions the user passed over."""
    await engine.on_suggestions_ignored(request.suggestions, request.context_words, request.category)
    return {"status": "recorded", "count": len(request.suggestions)}


@router.post("/corrections")
async def suggestion_corrected(
    request: CorrectionRequest,
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, str]:
    """Record that the user replaced a suggested word with another one."""
    await engine.on_suggestion_corrected(request.suggested, request.actual, request.context_words)
    return {"status": "recorded"}
