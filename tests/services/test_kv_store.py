"""Key-value store tests — in-memory and SQL backends share one contract.

Invariants:
    - set/get/remove round-trip strings unchanged
    - list(prefix) keeps first-insertion order, also after overwrites
    - LIKE wildcards in a prefix are matched literally
"""

from contextlib import asynccontextmanager

import pytest

from decision_twin.core.errors import StoreError
from decision_twin.infrastructure.kv_store import InMemoryKeyValueStore, StorageAdapter


@pytest.fixture(params=["memory", "sql"])
def any_store(request, store, sql_store):
    return store if request.param == "memory" else sql_store


async def test_get_missing_key_is_none(any_store):
    assert await any_store.get("nope") is None


async def test_set_get_remove(any_store):
    await any_store.set("settings", '{"theme":"light"}')
    assert await any_store.get("settings") == '{"theme":"light"}'
    await any_store.remove("settings")
    assert await any_store.get("settings") is None


async def test_remove_missing_key_is_noop(any_store):
    await any_store.remove("missing")
    assert await any_store.keys() == []


async def test_list_prefix_keeps_insertion_order_across_overwrites(any_store):
    await any_store.set("decision:b", "1")
    await any_store.set("decision:a", "2")
    await any_store.set("reminders", "[]")
    await any_store.set("decision:b", "3")
    items = await any_store.list("decision:")
    assert [(i.key, i.value) for i in items] == [("decision:b", "3"), ("decision:a", "2")]
    assert await any_store.keys() == ["decision:b", "decision:a", "reminders"]


async def test_list_prefix_treats_wildcards_literally(any_store):
    await any_store.set("a_b", "1")
    await any_store.set("axb", "2")
    await any_store.set("a%c", "3")
    assert [i.key for i in await any_store.list("a_")] == ["a_b"]
    assert [i.key for i in await any_store.list("a%")] == ["a%c"]


async def test_in_memory_rejects_non_string_values():
    with pytest.raises(StoreError):
        await InMemoryKeyValueStore().set("k", {"not": "text"})


async def test_adapter_prefers_host_store():
    host = InMemoryKeyValueStore({"k": "host"})
    fallback = InMemoryKeyValueStore({"k": "fallback"})
    assert await StorageAdapter(host=host, fallback=fallback).get("k") == "host"
    assert await StorageAdapter(fallback=fallback).get("k") == "fallback"


def test_adapter_needs_a_backend():
    with pytest.raises(ValueError):
        StorageAdapter()


async def test_sql_health_check(db_manager):
    assert await db_manager.health_check() is True


async def test_sql_health_check_reports_unwrapped_connect_failure(db_manager, monkeypatch):
    @asynccontextmanager
    async def refused():
        raise OSError("connection refused")
        yield

    monkeypatch.setattr(db_manager, "session", refused)
    assert await db_manager.health_check() is False
