"""Completed-sentence endpoint: intent sequence tracking and next-intent prediction."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.suggestions import SentenceCompletedRequest

router = APIRouter()


@router.post("/completed")
async def sentence_completed(
    request: SentenceCompletedRequest,
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, Any]:
    predictions = await engine.on_sentence_completed(request.text)
    return {
        "predictions": predictions,
        "next_sentences": engine.next_intentions,
    }
