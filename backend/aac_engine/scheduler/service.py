"""
Maintenance scheduler using APScheduler.

Runs two recurring jobs against the suggestion engine: flushing writes
deferred while the store was unavailable, and the retention sweep that
drops rarely used records nobody has touched for a long time.
"""

import logging
from typing import Any, Dict, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from aac_engine.config import Settings, settings as default_settings
from aac_engine.engine import SuggestionEngine

logger = logging.getLogger(__name__)

FLUSH_JOB_ID = "flush_deferred_writes"
SWEEP_JOB_ID = "retention_sweep"


class MaintenanceScheduler:
    """
    Owns the AsyncIOScheduler that keeps the pattern store tidy.

    Lifecycle:
        scheduler = MaintenanceScheduler(engine)
        await scheduler.initialize()   # call once at startup
        ...
        await scheduler.shutdown()     # call once at shutdown
    """

    def __init__(self, engine: SuggestionEngine, settings: Optional[Settings] = None):
        self.engine = engine
        self.settings = settings or default_settings
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._initialized = False

    async def initialize(self):
        """Create the scheduler, register the maintenance jobs and start it."""
        if self._initialized:
            logger.warning("Scheduler already initialized - skipping")
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.flush_deferred_writes,
            trigger=IntervalTrigger(seconds=self.settings.flush_interval_seconds),
            id=FLUSH_JOB_ID,
            name="Flush deferred pattern writes",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.add_job(
            self.retention_sweep,
            trigger=IntervalTrigger(hours=self.settings.retention_sweep_hours),
            id=SWEEP_JOB_ID,
            name="Retention sweep",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.start()
        self._initialized = True

        logger.info(f"Scheduler initialized with {len(self.scheduler.get_jobs())} jobs")

    async def shutdown(self):
        """Stop the scheduler without waiting for running jobs."""
        if self.scheduler and self._initialized:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler shut down")
        self._initialized = False

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    async def flush_deferred_writes(self) -> int:
        written = await self.engine.flush()
        if written:
            logger.info(f"Maintenance flush wrote {written} deferred records")
        return written

    async def retention_sweep(self) -> int:
        """Delete records older than the retention window that were used only once."""
        try:
            removed = await self.engine.patterns.sweep(self.settings.retention_days)
        except Exception:
            logger.exception("Retention sweep failed")
            return 0
        logger.info(f"Retention sweep finished, {removed} records removed")
        return removed

    def get_jobs(self) -> List[Dict[str, Any]]:
        """Describe the registered jobs."""
        if not self._initialized:
            return []
        return [
            {
                "job_id": job.id,
                "name": job.name,
                "next_run_time": job.next_run_time,
            }
            for job in self.scheduler.get_jobs()
        ]
