"""Grammar check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.suggestions import GrammarCheckRequest, GrammarCheckResult

router = APIRouter()


@router.post("/check", response_model=GrammarCheckResult)
async def check_grammar(
    request: GrammarCheckRequest,
    engine: SuggestionEngine = Depends(get_engine),
) -> GrammarCheckResult:
    """Return the best correction for the utterance plus every rule match."""
    return engine.check_grammar(request.words)
