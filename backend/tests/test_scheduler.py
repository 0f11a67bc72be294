"""Tests for the maintenance scheduler."""

import pytest

from aac_engine.config import Settings
from aac_engine.engine import SuggestionEngine
from aac_engine.scheduler.service import FLUSH_JOB_ID, SWEEP_JOB_ID, MaintenanceScheduler


@pytest.mark.asyncio
async def test_scheduler_registers_jobs(engine: SuggestionEngine, test_settings: Settings) -> None:
    scheduler = MaintenanceScheduler(engine, test_settings)
    assert scheduler.get_jobs() == []

    await scheduler.initialize()
    try:
        job_ids = {job["job_id"] for job in scheduler.get_jobs()}
        assert job_ids == {FLUSH_JOB_ID, SWEEP_JOB_ID}

        # Second initialize is a no-op
        await scheduler.initialize()
        assert len(scheduler.get_jobs()) == 2
    finally:
        await scheduler.shutdown()
    assert scheduler.get_jobs() == []


@pytest.mark.asyncio
async def test_flush_job_writes_deferred_records(engine: SuggestionEngine, test_settings: Settings) -> None:
    scheduler = MaintenanceScheduler(engine, test_settings)
    engine.backend.available = False
    await engine.record_utterance("I want water")
    assert engine.pending_writes > 0

    assert await scheduler.flush_deferred_writes() == 0
    engine.backend.available = True
    assert await scheduler.flush_deferred_writes() > 0
    assert engine.pending_writes == 0


@pytest.mark.asyncio
async def test_retention_sweep_job(engine: SuggestionEngine) -> None:
    settings = Settings(_env_file=None, retention_days=-1)
    scheduler = MaintenanceScheduler(engine, settings)
    await engine.record_utterance("go home")

    assert await scheduler.retention_sweep() > 0
    assert engine.patterns.snapshot.phrases == {}


@pytest.mark.asyncio
async def test_retention_sweep_survives_store_outage(engine: SuggestionEngine, test_settings: Settings) -> None:
    scheduler = MaintenanceScheduler(engine, test_settings)
    engine.backend.available = False
    assert await scheduler.retention_sweep() == 0
