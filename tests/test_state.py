import asyncio

import pytest

from schedule_bot.bot.state import EntityNameRegistry, SearchMode, SearchStateStore
from schedule_bot.schemas.schedule import EntityKind


@pytest.mark.asyncio
async def test_default_mode_is_none():
    store = SearchStateStore()
    assert await store.get(1) == SearchMode.NONE
    assert await store.consume(1) == SearchMode.NONE


@pytest.mark.asyncio
async def test_consume_reads_and_clears():
    store = SearchStateStore()
    await store.set(1, SearchMode.AWAITING_TEACHER)

    assert await store.get(1) == SearchMode.AWAITING_TEACHER
    assert await store.consume(1) == SearchMode.AWAITING_TEACHER
    assert await store.get(1) == SearchMode.NONE


@pytest.mark.asyncio
async def test_last_write_wins_and_chats_are_independent():
    store = SearchStateStore()
    await store.set(1, SearchMode.AWAITING_GROUP)
    await store.set(2, SearchMode.AWAITING_TEACHER)
    await store.set(1, SearchMode.AWAITING_TEACHER)

    assert await store.get(1) == SearchMode.AWAITING_TEACHER
    assert await store.get(2) == SearchMode.AWAITING_TEACHER

    await store.set(2, SearchMode.NONE)
    assert await store.get(2) == SearchMode.NONE
    await store.clear(1)
    assert await store.get(1) == SearchMode.NONE


@pytest.mark.asyncio
async def test_concurrent_updates():
    store = SearchStateStore()
    chat_ids = range(200)

    await asyncio.gather(*(
        store.set(chat_id, SearchMode.AWAITING_GROUP if chat_id % 2 else SearchMode.AWAITING_TEACHER)
        for chat_id in chat_ids
    ))
    modes = await asyncio.gather(*(store.consume(chat_id) for chat_id in chat_ids))

    assert modes == [
        SearchMode.AWAITING_GROUP if chat_id % 2 else SearchMode.AWAITING_TEACHER
        for chat_id in chat_ids
    ]
    assert await store.get(5) == SearchMode.NONE


def test_mode_for_kind():
    assert SearchMode.for_kind(EntityKind.GROUP) == SearchMode.AWAITING_GROUP
    assert SearchMode.for_kind(EntityKind.TEACHER) == SearchMode.AWAITING_TEACHER


@pytest.mark.asyncio
async def test_name_registry():
    names = EntityNameRegistry()
    await names.remember(EntityKind.GROUP, "59774", "РИЗ-220501")

    assert await names.lookup(EntityKind.GROUP, "59774") == "РИЗ-220501"
    assert await names.lookup(EntityKind.TEACHER, "59774") is None
