"""Utterance recording endpoint (fire-and-forget)."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, status

from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.models.suggestions import UtteranceRequest

router = APIRouter()


@router.post("", status_code=status.HTTP_202_ACCEPTED)
async def record_utterance(
    request: UtteranceRequest,
    background_tasks: BackgroundTasks,
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, str]:
    """Queue a spoken utterance for pattern learning."""
    background_tasks.add_task(engine.record_utterance, request.text, request.category)
    return {"status": "accepted"}
