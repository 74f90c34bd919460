"""Key/value state persistence backends used by agents."""
from __future__ import annotations

import abc
import json
from typing import Any, Dict, List, Optional

import structlog

from syzygy.state.storage import KeyValueStorage

logger = structlog.get_logger()

DEFAULT_PREFIX = "syzygy:"


class StateManager(abc.ABC):
    """Async key/value store. Missing keys read as ``None``, never an error."""

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or ``None``."""

    @abc.abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abc.abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``; removing a missing key is a no-op."""

    @abc.abstractmethod
    async def clear(self) -> None:
        """Remove every key owned by this manager."""

    @abc.abstractmethod
    async def keys(self) -> List[str]:
        """Return every stored key."""


class InMemoryStateManager(StateManager):
    """Process-local dict backend, useful for development and tests."""

    def __init__(self) -> None:
        self._store: Dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        return self._store.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)

    async def clear(self) -> None:
        self._store = {}

    async def keys(self) -> List[str]:
        return list(self._store)


class StorageStateManager(StateManager):
    """Durable backend over a string key/value storage, like browser local storage.

    Values are JSON encoded. Every physical key carries ``prefix`` so unrelated
    data in the same storage is never listed or cleared.
    """

    def __init__(self, storage: KeyValueStorage, prefix: str = DEFAULT_PREFIX) -> None:
        self.storage = storage
        self.prefix = prefix
        self._log = logger.bind(component="state_manager", prefix=prefix)

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get(self, key: str) -> Optional[Any]:
        raw = await self.storage.get_item(self._full_key(key))
        if not raw:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        await self.storage.set_item(self._full_key(key), json.dumps(value))

    async def delete(self, key: str) -> None:
        await self.storage.remove_item(self._full_key(key))

    async def clear(self) -> None:
        # List then delete: a concurrent writer can leave keys behind.
        keys = await self.keys()
        for key in keys:
            await self.delete(key)
        self._log.debug("Cleared state", count=len(keys))

    async def keys(self) -> List[str]:
        return [
            key[len(self.prefix):]
            for key in await self.storage.iter_keys()
            if key.startswith(self.prefix)
        ]
