"""Key-Value Stores — the persistence backends behind every service.

Invariants:
    - Values are opaque strings; no store parses or validates them
    - list(prefix) returns matches in first-insertion order; overwriting a key
      keeps its position
    - Store failures surface as StoreError; nothing here retries
    - StorageAdapter picks its backend once, at construction

Design Decisions:
    - InMemoryKeyValueStore doubles as the injectable host store and the test store
    - SqlKeyValueStore opens one session per call: services never hold a
      transaction across awaits
"""

import logging

from sqlalchemy import delete, select

from decision_twin.core.errors import ErrorContext, StoreError
from decision_twin.core.repository_protocols import KeyValueStore, StoreItem
from decision_twin.infrastructure.database import DatabaseSessionManager
from decision_twin.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


def _escape_like(prefix: str) -> str:
    return (
        prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )


class InMemoryKeyValueStore:
    """Dict-backed store. Python dicts keep insertion order."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StoreError(
                "value must be a string", "set", ErrorContext(store_key=key),
            )
        self._data[key] = value

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self) -> list[str]:
        return list(self._data)

    async def list(self, prefix: str) -> list[StoreItem]:
        return [
            StoreItem(k, v) for k, v in self._data.items() if k.startswith(prefix)
        ]


class SqlKeyValueStore:
    """Durable store over the kv_entries table."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    async def set(self, key: str, value: str) -> None:
        async with self.manager.session() as db:
            row = await db.scalar(
                select(KeyValueEntry).where(KeyValueEntry.key == key),
            )
            if row is None:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                row.value = value
            await db.commit()

    async def get(self, key: str) -> str | None:
        async with self.manager.session() as db:
            return await db.scalar(
                select(KeyValueEntry.value).where(KeyValueEntry.key == key),
            )

    async def remove(self, key: str) -> None:
        async with self.manager.session() as db:
            await db.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
            await db.commit()

    async def keys(self) -> list[str]:
        async with self.manager.session() as db:
            result = await db.scalars(
                select(KeyValueEntry.key).order_by(KeyValueEntry.id),
            )
            return list(result)

    async def list(self, prefix: str) -> list[StoreItem]:
        async with self.manager.session() as db:
            result = await db.execute(
                select(KeyValueEntry.key, KeyValueEntry.value)
                .where(KeyValueEntry.key.like(f"{_escape_like(prefix)}%", escape="\\"))
                .order_by(KeyValueEntry.id),
            )
            return [StoreItem(key, value) for key, value in result.all()]


class StorageAdapter:
    """Uniform store facade: the injected host store when present, else the fallback."""

    def __init__(
        self, host: KeyValueStore | None = None,
        fallback: KeyValueStore | None = None,
    ):
        if host is None and fallback is None:
            raise ValueError("StorageAdapter needs a host or a fallback store")
        self.backend: KeyValueStore = host if host is not None else fallback
        logger.debug(f"Storage backend: {type(self.backend).__name__}")

    async def set(self, key: str, value: str) -> None:
        await self.backend.set(key, value)

    async def get(self, key: str) -> str | None:
        return await self.backend.get(key)

    async def remove(self, key: str) -> None:
        await self.backend.remove(key)

    async def keys(self) -> list[str]:
        return await self.backend.keys()

    async def list(self, prefix: str) -> list[StoreItem]:
        return await self.backend.list(prefix)
