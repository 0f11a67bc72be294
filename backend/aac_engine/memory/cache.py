"""Local fast-access cache for settings and small derived state."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LocalCache(ABC):
    """String-keyed get/set; not meant for the full pattern corpus."""

    @abstractmethod
    async def get(self, key: str) -> str | None: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...


class InMemoryCache(LocalCache):
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value
