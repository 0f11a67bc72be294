"""Dependency injection providers for FastAPI."""

from aac_engine.config import Settings, settings
from aac_engine.engine import SuggestionEngine
from aac_engine.memory.store import InMemoryPatternBackend, MongoPatternBackend, PatternBackend
from aac_engine.scheduler.service import MaintenanceScheduler

# Global singleton instances (one engine per process and identity scope)
_engine: SuggestionEngine | None = None
_scheduler: MaintenanceScheduler | None = None


def create_backend(config: Settings = settings) -> PatternBackend:
    """Build the pattern backend selected by ``store_backend``."""
    if config.store_backend == "mongodb":
        return MongoPatternBackend(
            config.mongodb_uri,
            config.mongodb_database,
            config.mongodb_collection,
            scope=config.identity_scope,
        )
    return InMemoryPatternBackend(scope=config.identity_scope)


def get_engine() -> SuggestionEngine:
    """Return singleton SuggestionEngine instance."""
    global _engine
    if _engine is None:
        _engine = SuggestionEngine(create_backend(settings), settings=settings)
    return _engine


def get_scheduler() -> MaintenanceScheduler:
    """Return singleton MaintenanceScheduler instance."""
    global _scheduler
    if _scheduler is None:
        _scheduler = MaintenanceScheduler(get_engine(), settings)
    return _scheduler
