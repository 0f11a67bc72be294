"""Shared test fixtures for the AAC suggestion engine."""

from collections.abc import AsyncGenerator
from typing import Any, Iterable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from aac_engine.config import Settings
from aac_engine.dependencies import get_engine
from aac_engine.engine import SuggestionEngine
from aac_engine.main import app
from aac_engine.memory.cache import InMemoryCache
from aac_engine.memory.store import InMemoryPatternBackend, RecordType, StoreUnavailableError


class FlakyBackend(InMemoryPatternBackend):
    """In-memory backend that can be switched off to simulate an outage."""

    def __init__(self, scope: str = "default") -> None:
        super().__init__(scope)
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailableError("store offline")

    async def ping(self) -> bool:
        return self.available

    async def upsert(self, record_type: RecordType, key: str, frequency_delta: float, metadata: dict[str, Any] | None = None, *, add_to_set: dict[str, Iterable[Any]] | None = None, increments: dict[str, float] | None = None) -> None:
        self._check()
        await super().upsert(
            record_type, key, frequency_delta, metadata, add_to_set=add_to_set, increments=increments
        )

    async def query(self, record_type: RecordType, filter: dict[str, Any] | None = None, order_by: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        self._check()
        return await super().query(record_type, filter, order_by, limit)

    async def delete(self, record_type: RecordType, filter: dict[str, Any] | None = None) -> int:
        self._check()
        return await super().delete(record_type, filter)


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, store_backend="memory", store_timeout_seconds=2.0)


@pytest.fixture
def backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest_asyncio.fixture
async def engine(
    backend: FlakyBackend, cache: InMemoryCache, test_settings: Settings
) -> AsyncGenerator[SuggestionEngine, None]:
    """Initialized engine over an empty in-memory store."""
    engine = SuggestionEngine(backend, cache=cache, settings=test_settings)
    await engine.initialize()
    yield engine
    await engine.close()


@pytest_asyncio.fixture
async def client(engine: SuggestionEngine) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    app.dependency_overrides[get_engine] = lambda: engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
