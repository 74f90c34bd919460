"""String key/value storages backing :class:`StorageStateManager`."""
from __future__ import annotations

import abc
import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Union

import aiosqlite
import structlog

logger = structlog.get_logger()


class KeyValueStorage(abc.ABC):
    """Minimal local-storage style interface over string keys and values."""

    @abc.abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        ...

    @abc.abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        ...

    @abc.abstractmethod
    async def remove_item(self, key: str) -> None:
        ...

    @abc.abstractmethod
    async def iter_keys(self) -> List[str]:
        ...


class MemoryStorage(KeyValueStorage):
    """Ephemeral storage; data is lost with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def iter_keys(self) -> List[str]:
        return list(self._items)


class SQLiteStorage(KeyValueStorage):
    """Durable storage in a single SQLite table.

    The connection is opened lazily on first use and statements are
    serialised behind a lock so concurrent agents can share one instance.
    """

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS storage (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );
    """

    def __init__(self, db_path: Union[str, Path] = "syzygy_state.db") -> None:
        self.db_path = str(db_path)
        self._connection: Optional[aiosqlite.Connection] = None
        self._lock: Optional[asyncio.Lock] = None
        self._log = logger.bind(component="sqlite_storage", db=self.db_path)

    def _get_lock(self) -> asyncio.Lock:
        # Bound to the loop that first contends on it; reset by close().
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def connect(self) -> aiosqlite.Connection:
        if self._connection is None:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self.db_path)
            await self._connection.executescript(self.SCHEMA)
            await self._connection.commit()
            self._log.info("Database initialized")
        return self._connection

    async def close(self) -> None:
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
        self._lock = None

    async def __aenter__(self) -> "SQLiteStorage":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_item(self, key: str) -> Optional[str]:
        async with self._get_lock():
            conn = await self.connect()
            async with conn.execute("SELECT value FROM storage WHERE key = ?", (key,)) as cursor:
                row = await cursor.fetchone()
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        async with self._get_lock():
            conn = await self.connect()
            await conn.execute(
                "INSERT INTO storage (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            await conn.commit()

    async def remove_item(self, key: str) -> None:
        async with self._get_lock():
            conn = await self.connect()
            await conn.execute("DELETE FROM storage WHERE key = ?", (key,))
            await conn.commit()

    async def iter_keys(self) -> List[str]:
        async with self._get_lock():
            conn = await self.connect()
            async with conn.execute("SELECT key FROM storage ORDER BY rowid") as cursor:
                rows = await cursor.fetchall()
        return [row[0] for row in rows]
