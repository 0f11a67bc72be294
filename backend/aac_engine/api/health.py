"""Health check endpoint for infrastructure monitoring."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from aac_engine.config import Settings, get_settings
from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health_check(
    settings: Settings = Depends(get_settings),
    engine: SuggestionEngine = Depends(get_engine),
) -> dict[str, Any]:
    """Return store status; suggestions keep working while it is degraded."""
    store = await engine.status()
    overall = "healthy" if store["store"] == "connected" and not store["degraded"] else "degraded"
    return {
        "status": overall,
        "environment": settings.environment,
        "services": {"store": store},
    }
