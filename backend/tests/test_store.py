from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from graph_messaging.errors import NotFound
from graph_messaging.store.memory import InMemoryMessageStore
from graph_messaging.store.mongo import MongoMessageStore


@pytest.mark.asyncio
async def test_memory_store_assigns_unique_ids_and_increasing_times(store, alice, bob):
    first = await store.create_message_edge(alice.id, bob.id, "one")
    second = await store.create_message_edge(alice.id, bob.id, "two")

    assert first.id != second.id
    assert second.sentTime > first.sentTime


@pytest.mark.asyncio
async def test_memory_store_read_flag_is_idempotent(store, alice, bob):
    edge = await store.create_message_edge(alice.id, bob.id, "one")
    await store.set_edge_read_flag(edge.id)
    await store.set_edge_read_flag(edge.id)
    assert (await store.resolve_edge(edge.id)).isRead is True


@pytest.mark.asyncio
async def test_memory_store_returns_copies(store, alice, bob):
    edge = await store.create_message_edge(alice.id, bob.id, "one")
    edge.mark_read()
    assert (await store.resolve_edge(edge.id)).isRead is False


@pytest.mark.asyncio
async def test_memory_store_pair_query_is_newest_first(store, alice, bob, carol):
    m1 = await store.create_message_edge(alice.id, bob.id, "one")
    await store.create_message_edge(alice.id, carol.id, "other")
    m2 = await store.create_message_edge(bob.id, alice.id, "two")

    refs = await store.query_edges_between(alice.id, bob.id)
    assert [r.edge_id for r in refs] == [m2.id, m1.id]
    assert refs[0].tail_id == bob.id
    assert refs[0].content == "two"


@pytest.mark.asyncio
async def test_memory_store_missing_lookups():
    store = InMemoryMessageStore()
    with pytest.raises(NotFound):
        await store.resolve_node("a" * 32)
    with pytest.raises(NotFound):
        await store.resolve_edge("a" * 32)
    with pytest.raises(NotFound):
        await store.set_edge_read_flag("a" * 32)


def _mongo_store(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    return MongoMessageStore(db)


@pytest.mark.asyncio
async def test_mongo_resolve_edge_builds_model():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value={
        "_id": "a" * 32,
        "senderId": "b" * 32,
        "recipientId": "c" * 32,
        "content": "hello",
        "sentTime": datetime(2024, 1, 1),
        "isRead": True,
    })
    edge = await _mongo_store(collection).resolve_edge("a" * 32)

    collection.find_one.assert_awaited_once_with({"_id": "a" * 32})
    assert edge.id == "a" * 32
    assert edge.isRead is True


@pytest.mark.asyncio
async def test_mongo_missing_edge_is_not_found():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    with pytest.raises(NotFound):
        await _mongo_store(collection).resolve_edge("a" * 32)


@pytest.mark.asyncio
async def test_mongo_read_flag_only_sets_true():
    collection = MagicMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    await _mongo_store(collection).set_edge_read_flag("a" * 32)
    collection.update_one.assert_awaited_once_with({"_id": "a" * 32}, {"$set": {"isRead": True}})

    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
    with pytest.raises(NotFound):
        await _mongo_store(collection).set_edge_read_flag("a" * 32)


@pytest.mark.asyncio
async def test_mongo_create_edge_inserts_document():
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    edge = await _mongo_store(collection).create_message_edge("b" * 32, "c" * 32, "hello")

    document = collection.insert_one.await_args.args[0]
    assert document["_id"] == edge.id
    assert document["isRead"] is False
    assert document["content"] == "hello"
