"""Tests for the in-memory and durable state managers."""
from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from syzygy.state.manager import InMemoryStateManager, StorageStateManager
from syzygy.state.storage import MemoryStorage, SQLiteStorage


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.mark.anyio
async def test_in_memory_contract() -> None:
    manager = InMemoryStateManager()

    assert await manager.get("missing") is None
    await manager.set("a", {"n": 1})
    await manager.set("b", [1, 2])
    assert await manager.get("a") == {"n": 1}
    assert sorted(await manager.keys()) == ["a", "b"]

    await manager.delete("a")
    await manager.delete("never-there")
    assert await manager.keys() == ["b"]

    await manager.clear()
    assert await manager.keys() == []


@pytest.mark.anyio
async def test_storage_manager_prefixes_physical_keys() -> None:
    storage = MemoryStorage()
    manager = StorageStateManager(storage)

    await manager.set("greeting", {"text": "hi"})

    assert await storage.iter_keys() == ["syzygy:greeting"]
    assert await storage.get_item("syzygy:greeting") == '{"text": "hi"}'
    assert await manager.keys() == ["greeting"]
    assert await manager.get("greeting") == {"text": "hi"}


@pytest.mark.anyio
async def test_storage_manager_ignores_foreign_keys() -> None:
    storage = MemoryStorage({"other-app:theme": '"dark"', "syzygy:mine": "1"})
    manager = StorageStateManager(storage)

    assert await manager.keys() == ["mine"]
    await manager.clear()

    assert await storage.iter_keys() == ["other-app:theme"]


@pytest.mark.anyio
async def test_storage_manager_custom_prefix_and_missing_keys() -> None:
    storage = MemoryStorage({"app:empty": ""})
    manager = StorageStateManager(storage, prefix="app:")

    assert await manager.get("absent") is None
    assert await manager.get("empty") is None
    await manager.set("flag", False)
    assert await manager.get("flag") is False


@pytest.mark.anyio
async def test_sqlite_storage_persists_across_connections(tmp_path: Path) -> None:
    db_path = tmp_path / "state" / "agents.db"

    async with SQLiteStorage(db_path) as storage:
        manager = StorageStateManager(storage)
        await manager.set("agent:planner:steps", ["a", "b"])
        await manager.set("agent:planner:steps", ["a", "b", "c"])
        await manager.set("counter", 3)

    async with SQLiteStorage(db_path) as storage:
        manager = StorageStateManager(storage)
        assert await manager.get("agent:planner:steps") == ["a", "b", "c"]
        assert await manager.keys() == ["agent:planner:steps", "counter"]

        await manager.delete("counter")
        assert await manager.get("counter") is None

        await manager.clear()
        assert await manager.keys() == []


@pytest.mark.anyio
async def test_sqlite_storage_connects_lazily(tmp_path: Path) -> None:
    storage = SQLiteStorage(tmp_path / "lazy.db")

    assert await storage.get_item("nothing") is None
    await storage.set_item("k", "v")
    assert await storage.iter_keys() == ["k"]
    await storage.remove_item("k")
    assert await storage.iter_keys() == []
    await storage.close()


def test_sqlite_storage_is_reusable_on_a_new_event_loop_after_close(tmp_path: Path) -> None:
    storage = SQLiteStorage(tmp_path / "loops.db")

    async def write_concurrently(prefix: str) -> None:
        # Two writers contend on the storage lock, binding it to the running loop
        await asyncio.gather(storage.set_item(f"{prefix}-a", "1"), storage.set_item(f"{prefix}-b", "2"))
        await storage.close()

    asyncio.run(write_concurrently("first"))
    asyncio.run(write_concurrently("second"))

    async def read_keys() -> list:
        async with storage:
            return await storage.iter_keys()

    assert asyncio.run(read_keys()) == ["first-a", "first-b", "second-a", "second-b"]
