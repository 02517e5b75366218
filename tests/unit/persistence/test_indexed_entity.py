"""IndexedEntity: index/record consistency for create, delete, list, seed and mutate outcomes."""

import json
import logging

import pytest

from expense_app.persistence import (
    Applied,
    EntityConflictError,
    EntityNotFoundError,
    ImmutableIdentityError,
    IndexedEntity,
    InvalidCursorError,
    Missing,
    Rejected,
    Rejection,
    Unchanged,
)

from counter_entity import COUNTER_ENTITY, Counter


async def test_create_then_exists_get_and_list(counters):
    created = await counters.create(Counter(id="a", value=1))
    assert created == Counter(id="a", value=1)
    assert await counters.exists("a") is True
    assert await counters.get_state("a") == created
    page = await counters.list()
    assert page.items == [created]
    assert page.next_cursor is None


async def test_create_writes_record_and_index_keys(counters, memory_store):
    await counters.create(Counter(id="a"))
    assert json.loads(await memory_store.get("counter-index")) == ["a"]
    assert json.loads(await memory_store.get("counter/a"))["id"] == "a"


async def test_create_generates_id_when_empty(counters):
    created = await counters.create({"label": "generated"})
    assert created.id.startswith("c-")
    assert created.label == "generated"
    assert await counters.exists(created.id)


async def test_create_mapping_is_merged_over_initial_state(counters):
    created = await counters.create({"id": "m"})
    assert created == Counter(id="m", label="", value=0)


async def test_create_duplicate_raises_conflict_and_keeps_original(counters):
    await counters.create(Counter(id="a", value=1))
    with pytest.raises(EntityConflictError):
        await counters.create(Counter(id="a", value=99))
    assert (await counters.get_state("a")).value == 1
    assert [c.id for c in (await counters.list()).items] == ["a"]


async def test_returned_records_are_copies(counters):
    created = await counters.create(Counter(id="a", value=1))
    created.value = 100
    fetched = await counters.get_state("a")
    fetched.value = 200
    assert (await counters.get_state("a")).value == 1


async def test_get_state_missing_raises_not_found(counters):
    """Missing records raise; the initial state is never handed back instead."""
    with pytest.raises(EntityNotFoundError) as exc_info:
        await counters.get_state("ghost")
    assert exc_info.value.entity_id == "ghost"


async def test_delete_removes_record_and_index_entry(counters, memory_store):
    await counters.create(Counter(id="a"))
    await counters.create(Counter(id="b"))
    await counters.delete("a")
    assert await counters.exists("a") is False
    assert [c.id for c in (await counters.list()).items] == ["b"]
    assert await memory_store.get("counter/a") is None
    with pytest.raises(EntityNotFoundError):
        await counters.get_state("a")


async def test_delete_missing_raises_not_found(counters):
    with pytest.raises(EntityNotFoundError):
        await counters.delete("ghost")


async def test_list_preserves_index_order(counters):
    for entity_id in ("z", "a", "m"):
        await counters.create(Counter(id=entity_id))
    assert [c.id for c in (await counters.list()).items] == ["z", "a", "m"]


async def test_list_pages_with_cursor(counters):
    for i in range(5):
        await counters.create(Counter(id=f"k{i}"))
    first = await counters.list(limit=2)
    assert [c.id for c in first.items] == ["k0", "k1"]
    second = await counters.list(cursor=first.next_cursor, limit=2)
    assert [c.id for c in second.items] == ["k2", "k3"]
    last = await counters.list(cursor=second.next_cursor, limit=2)
    assert [c.id for c in last.items] == ["k4"]
    assert last.next_cursor is None


@pytest.mark.parametrize("cursor", ["abc", "-1", "99"])
async def test_list_rejects_bad_cursor(counters, cursor):
    await counters.create(Counter(id="a"))
    with pytest.raises(InvalidCursorError):
        await counters.list(cursor=cursor)


async def test_list_skips_index_entries_without_record(counters, memory_store, caplog):
    await counters.create(Counter(id="a"))
    await memory_store.put("counter-index", json.dumps(["a", "orphan"]))
    with caplog.at_level(logging.WARNING):
        page = await counters.list()
    assert [c.id for c in page.items] == ["a"]
    assert any(r.getMessage() == "index_record_missing" for r in caplog.records)


async def test_mutate_applies_and_persists(counters):
    await counters.create(Counter(id="a", value=1))
    result = await counters.mutate("a", lambda c: c.model_copy(update={"value": c.value + 1}))
    assert isinstance(result, Applied)
    assert result.record.value == 2
    assert (await counters.get_state("a")).value == 2


async def test_mutate_rejection_leaves_record_untouched(counters, memory_store):
    await counters.create(Counter(id="a", value=1))
    before = await memory_store.get_versioned("counter/a")
    result = await counters.mutate("a", lambda c: Rejection("no thanks"))
    assert result == Rejected("no thanks")
    assert await memory_store.get_versioned("counter/a") == before


async def test_mutate_equal_record_is_unchanged_without_write(counters, memory_store):
    await counters.create(Counter(id="a", value=1))
    before = await memory_store.get_versioned("counter/a")
    result = await counters.mutate("a", lambda c: c)
    assert isinstance(result, Unchanged)
    assert result.record.value == 1
    assert (await memory_store.get_versioned("counter/a")).version == before.version


async def test_mutate_missing_returns_missing(counters):
    called = []
    result = await counters.mutate("ghost", lambda c: called.append(c) or c)
    assert result == Missing("ghost")
    assert called == []


async def test_mutate_cannot_change_id(counters):
    await counters.create(Counter(id="a"))
    with pytest.raises(ImmutableIdentityError):
        await counters.mutate("a", lambda c: c.model_copy(update={"id": "b"}))
    assert await counters.exists("a")
    assert not await counters.exists("b")


async def test_ensure_seed_loads_records_and_index(counters):
    assert await counters.ensure_seed() is True
    page = await counters.list()
    assert [c.id for c in page.items] == ["c1", "c2"]
    assert page.items[1].value == 5


async def test_ensure_seed_is_idempotent(counters, memory_store):
    await counters.ensure_seed()
    snapshot = {k: await memory_store.get(k) for k in await memory_store.list_keys_with_prefix("counter")}
    assert await counters.ensure_seed() is False
    again = {k: await memory_store.get(k) for k in await memory_store.list_keys_with_prefix("counter")}
    assert again == snapshot


async def test_ensure_seed_skips_when_data_present(store):
    """A second process (fresh entity instance) sees existing data and does not reseed."""
    first = IndexedEntity(store, COUNTER_ENTITY)
    await first.create(Counter(id="own"))
    assert await first.ensure_seed() is False
    second = IndexedEntity(store, COUNTER_ENTITY)
    assert await second.ensure_seed() is False
    assert [c.id for c in (await second.list()).items] == ["own"]


async def test_ensure_seed_runs_once_per_instance(counters):
    await counters.ensure_seed()
    await counters.delete("c1")
    await counters.delete("c2")
    assert await counters.ensure_seed() is False
    assert (await counters.list()).items == []
