"""Durable pattern/interaction store backends.

Every backend implements the same upsert-by-key contract, so the
in-process store used in tests and on devices is interchangeable with
MongoDB.

Document schema::

    {
        "scope": "default",
        "record_type": "transition",
        "key": "want->water",
        "frequency": 3.5,
        "metadata": {"from": "want", "to": "water", "order": 1},
        "created_at": "2026-02-08T10:30:00Z",
        "updated_at": "2026-02-08T11:00:00Z"
    }
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class StoreUnavailableError(Exception):
    """Raised when the backing store cannot be read or written."""


class RecordType(str, Enum):
    WORD = "word"
    PHRASE = "phrase"
    TRANSITION = "transition"
    TEMPORAL = "temporal"
    TOPIC = "topic"
    INTENT_PATTERN = "intent_pattern"
    INTENT_SEQUENCE = "intent_sequence"
    EMBEDDING = "embedding"
    CORRECTION = "correction"
    INTERACTION = "interaction"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PendingWrite:
    """An upsert waiting to reach the store."""

    record_type: RecordType
    key: str
    frequency_delta: float = 1
    metadata: dict[str, Any] = field(default_factory=dict)
    add_to_set: dict[str, tuple[Any, ...]] = field(default_factory=dict)
    increments: dict[str, float] = field(default_factory=dict)


class PatternBackend(ABC):
    """Upsert/query contract every store backend implements."""

    def __init__(self, scope: str = "default") -> None:
        self.scope = scope

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    @abstractmethod
    async def ping(self) -> bool: ...

    @abstractmethod
    async def upsert(
        self,
        record_type: RecordType,
        key: str,
        frequency_delta: float,
        metadata: dict[str, Any] | None = None,
        *,
        add_to_set: dict[str, Iterable[Any]] | None = None,
        increments: dict[str, float] | None = None,
    ) -> None:
        """Create or merge a record: counters add, metadata fields overwrite."""

    @abstractmethod
    async def query(
        self,
        record_type: RecordType,
        filter: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return matching documents; ``order_by="-frequency"`` sorts descending."""

    @abstractmethod
    async def delete(self, record_type: RecordType, filter: dict[str, Any] | None = None) -> int: ...

    async def apply(self, write: PendingWrite) -> None:
        await self.upsert(
            write.record_type,
            write.key,
            write.frequency_delta,
            write.metadata,
            add_to_set=write.add_to_set or None,
            increments=write.increments or None,
        )


# ------------------------------------------------------------------
# In-process backend
# ------------------------------------------------------------------


def _resolve(doc: dict[str, Any], dotted: str) -> Any:
    value: Any = doc
    for part in dotted.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


_OPERATORS = {
    "$lt": lambda a, b: a is not None and a < b,
    "$lte": lambda a, b: a is not None and a <= b,
    "$gt": lambda a, b: a is not None and a > b,
    "$gte": lambda a, b: a is not None and a >= b,
    "$in": lambda a, b: a in b,
    "$ne": lambda a, b: a != b,
}


def matches(doc: dict[str, Any], filter: dict[str, Any] | None) -> bool:
    """Evaluate the Mongo-style subset of filters the engine uses."""
    for path, expected in (filter or {}).items():
        actual = _resolve(doc, path)
        if isinstance(expected, dict) and expected and all(k.startswith("$") for k in expected):
            for op, operand in expected.items():
                if not _OPERATORS[op](actual, operand):
                    return False
        elif actual != expected:
            return False
    return True


def _sort_key(order_by: str) -> tuple[str, bool]:
    if order_by.startswith("-"):
        return order_by[1:], True
    return order_by, False


class InMemoryPatternBackend(PatternBackend):
    """Dictionary-backed store; the default for tests and offline devices."""

    def __init__(self, scope: str = "default") -> None:
        super().__init__(scope)
        self._records: dict[tuple[str, str, str], dict[str, Any]] = {}

    async def ping(self) -> bool:
        return True

    async def upsert(
        self,
        record_type: RecordType,
        key: str,
        frequency_delta: float,
        metadata: dict[str, Any] | None = None,
        *,
        add_to_set: dict[str, Iterable[Any]] | None = None,
        increments: dict[str, float] | None = None,
    ) -> None:
        record_type = RecordType(record_type)
        slot = (self.scope, record_type.value, key)
        now = _now()
        doc = self._records.get(slot)
        if doc is None:
            doc = {
                "scope": self.scope,
                "record_type": record_type.value,
                "key": key,
                "frequency": 0,
                "metadata": {},
                "created_at": now,
            }
            self._records[slot] = doc
        doc["frequency"] += frequency_delta
        doc["updated_at"] = now
        meta = doc["metadata"]
        meta.update(copy.deepcopy(metadata or {}))
        for name, delta in (increments or {}).items():
            meta[name] = meta.get(name, 0) + delta
        for name, values in (add_to_set or {}).items():
            existing = meta.setdefault(name, [])
            for value in values:
                if value not in existing:
                    existing.append(value)

    async def query(
        self,
        record_type: RecordType,
        filter: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        record_type = RecordType(record_type)
        found = [
            doc
            for (scope, rtype, _), doc in self._records.items()
            if scope == self.scope and rtype == record_type.value and matches(doc, filter)
        ]
        if order_by:
            field_name, descending = _sort_key(order_by)
            found.sort(key=lambda d: (_resolve(d, field_name) or 0, d["key"]), reverse=descending)
        else:
            found.sort(key=lambda d: d["key"])
        if limit is not None:
            found = found[:limit]
        return copy.deepcopy(found)

    async def delete(self, record_type: RecordType, filter: dict[str, Any] | None = None) -> int:
        record_type = RecordType(record_type)
        doomed = [
            slot
            for slot, doc in self._records.items()
            if slot[0] == self.scope and slot[1] == record_type.value and matches(doc, filter)
        ]
        for slot in doomed:
            del self._records[slot]
        return len(doomed)


# ------------------------------------------------------------------
# MongoDB backend
# ------------------------------------------------------------------


class MongoPatternBackend(PatternBackend):
    """MongoDB-backed store using motor.

    Lifecycle:
        backend = MongoPatternBackend(uri, database, collection, scope)
        await backend.initialize()   # call once at startup
        ...
        await backend.close()        # call once at shutdown
    """

    def __init__(
        self,
        uri: str,
        database: str,
        collection: str = "patterns",
        scope: str = "default",
    ) -> None:
        super().__init__(scope)
        self._uri = uri
        self._database_name = database
        self._collection_name = collection
        self._client: AsyncIOMotorClient | None = None
        self._collection: AsyncIOMotorCollection | None = None

    async def initialize(self) -> None:
        if self._client is not None:
            logger.warning("MongoPatternBackend already initialized - skipping")
            return
        logger.info(f"Connecting to MongoDB at {self._uri}")
        self._client = AsyncIOMotorClient(self._uri, serverSelectionTimeoutMS=5_000)
        self._collection = self._client[self._database_name][self._collection_name]
        try:
            await self._client.admin.command("ping")
            await self._collection.create_index(
                [("scope", ASCENDING), ("record_type", ASCENDING), ("key", ASCENDING)],
                unique=True,
            )
        except PyMongoError as exc:
            logger.warning(f"MongoDB not reachable at startup: {exc}")
            return
        logger.info("MongoDB connection established")

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection = None
            logger.info("MongoDB connection closed")

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self._collection is None:
            raise RuntimeError(
                "MongoPatternBackend not initialized - call initialize() first"
            )
        return self._collection

    async def ping(self) -> bool:
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as exc:
            logger.warning(f"MongoDB ping failed: {exc}")
            return False

    def _scoped(self, record_type: RecordType, filter: dict[str, Any] | None = None) -> dict[str, Any]:
        return {"scope": self.scope, "record_type": RecordType(record_type).value, **(filter or {})}

    async def upsert(
        self,
        record_type: RecordType,
        key: str,
        frequency_delta: float,
        metadata: dict[str, Any] | None = None,
        *,
        add_to_set: dict[str, Iterable[Any]] | None = None,
        increments: dict[str, float] | None = None,
    ) -> None:
        now = _now()
        update: dict[str, Any] = {
            "$inc": {"frequency": frequency_delta},
            "$set": {"updated_at": now},
            "$setOnInsert": {"created_at": now},
        }
        for name, value in (metadata or {}).items():
            update["$set"][f"metadata.{name}"] = value
        for name, delta in (increments or {}).items():
            update["$inc"][f"metadata.{name}"] = delta
        if add_to_set:
            update["$addToSet"] = {
                f"metadata.{name}": {"$each": list(values)} for name, values in add_to_set.items()
            }
        try:
            await self.collection.update_one(
                {**self._scoped(record_type), "key": key},
                update,
                upsert=True,
            )
        except PyMongoError as exc:
            raise StoreUnavailableError(f"upsert {record_type}:{key} failed: {exc}") from exc

    async def query(
        self,
        record_type: RecordType,
        filter: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        cursor = self.collection.find(self._scoped(record_type, filter), {"_id": 0})
        if order_by:
            field_name, descending = _sort_key(order_by)
            cursor = cursor.sort([(field_name, DESCENDING if descending else ASCENDING), ("key", ASCENDING)])
        else:
            cursor = cursor.sort("key", ASCENDING)
        if limit is not None:
            cursor = cursor.limit(limit)
        try:
            return await cursor.to_list(length=None)
        except PyMongoError as exc:
            raise StoreUnavailableError(f"query {record_type} failed: {exc}") from exc

    async def delete(self, record_type: RecordType, filter: dict[str, Any] | None = None) -> int:
        try:
            result = await self.collection.delete_many(self._scoped(record_type, filter))
        except PyMongoError as exc:
            raise StoreUnavailableError(f"delete {record_type} failed: {exc}") from exc
        return result.deleted_count


# ------------------------------------------------------------------
# Deferred writes
# ------------------------------------------------------------------


class WriteQueue:
    """Holds writes that failed with ``StoreUnavailableError`` for a later retry."""

    def __init__(self, limit: int = 5_000) -> None:
        self._pending: deque[PendingWrite] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._pending)

    async def flush(self, backend: PatternBackend) -> int:
        """Retry pending writes in order; stop at the first failure."""
        written = 0
        while self._pending:
            write = self._pending[0]
            try:
                await backend.apply(write)
            except StoreUnavailableError as exc:
                logger.warning(f"Store still unavailable, {len(self._pending)} writes pending: {exc}")
                break
            self._pending.popleft()
            written += 1
        if written:
            logger.info(f"Flushed {written} deferred writes")
        return written

    async def submit(self, backend: PatternBackend, writes: Iterable[PendingWrite]) -> bool:
        """Write in order, deferring the remainder once the store fails.

        Returns True when everything reached the store.
        """
        writes = list(writes)
        if self._pending:
            await self.flush(backend)
        if self._pending:
            self._pending.extend(writes)
            return False
        for index, write in enumerate(writes):
            try:
                await backend.apply(write)
            except StoreUnavailableError as exc:
                logger.warning(f"Deferring {len(writes) - index} writes: {exc}")
                self._pending.extend(writes[index:])
                return False
        return True

    def clear(self) -> None:
        self._pending.clear()
