"""Central API router that aggregates all route modules."""

from fastapi import APIRouter

from aac_engine.api.grammar import router as grammar_router
from aac_engine.api.health import router as health_router
from aac_engine.api.interactions import router as interactions_router
from aac_engine.api.learning import router as learning_router
from aac_engine.api.sentences import router as sentences_router
from aac_engine.api.suggestions import router as suggestions_router
from aac_engine.api.utterances import router as utterances_router
from aac_engine.api.words import router as words_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(suggestions_router, prefix="/suggestions", tags=["suggestions"])
api_router.include_router(utterances_router, prefix="/utterances", tags=["learning"])
api_router.include_router(interactions_router, prefix="/interactions", tags=["learning"])
api_router.include_router(sentences_router, prefix="/sentences", tags=["learning"])
api_router.include_router(grammar_router, prefix="/grammar", tags=["grammar"])
api_router.include_router(words_router, prefix="/words", tags=["words"])
api_router.include_router(learning_router, prefix="/learning", tags=["learning"])
