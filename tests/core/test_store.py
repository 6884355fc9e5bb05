"""Tests for the SQLite-backed TaskStore."""

from __future__ import annotations

import asyncio

import pytest

from tasklist.core.errors import StorageError
from tasklist.core.models import Task
from tasklist.core.store import MAX_ROW_ID, TaskStore


class TestTaskStore:
    @pytest.mark.asyncio
    async def test_empty(self, store):
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_insert_assigns_ids(self, store):
        a = await store.insert("Buy milk")
        b = await store.insert("Walk dog")
        assert a == Task(id=1, title="Buy milk", completed=False)
        assert b.id == 2
        assert await store.list() == [a, b]

    @pytest.mark.asyncio
    async def test_empty_title_is_stored(self, store):
        task = await store.insert("")
        assert (await store.list()) == [task]
        assert task.title == ""

    @pytest.mark.asyncio
    async def test_delete(self, store):
        a = await store.insert("a")
        b = await store.insert("b")
        assert await store.delete(a.id) == 1
        assert await store.list() == [b]

    @pytest.mark.asyncio
    async def test_delete_unknown_id_removes_nothing(self, store):
        await store.insert("a")
        assert await store.delete(999) == 0
        assert len(await store.list()) == 1

    @pytest.mark.asyncio
    async def test_ids_are_not_reused(self, store):
        first = await store.insert("a")
        await store.delete(first.id)
        second = await store.insert("b")
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_concurrent_inserts_get_unique_ids(self, store):
        tasks = await asyncio.gather(*(store.insert(f"t{i}") for i in range(10)))
        ids = [t.id for t in tasks]
        assert len(set(ids)) == 10
        assert [t.id for t in await store.list()] == sorted(ids)

    @pytest.mark.asyncio
    async def test_missing_table_raises_storage_error(self, broken_store):
        with pytest.raises(StorageError) as excinfo:
            await broken_store.list()
        assert excinfo.value.context["operation"] == "list"
        assert "no such table" in str(excinfo.value.cause)

    @pytest.mark.asyncio
    async def test_unopenable_path_raises_storage_error(self, tmp_path):
        store = TaskStore(str(tmp_path))
        with pytest.raises(StorageError):
            await store.insert("x")

    def test_from_url(self, tmp_path):
        store = TaskStore.from_url(f"sqlite:///{tmp_path / 'u.db'}")
        assert store.path == str((tmp_path / "u.db").resolve())


class TestTaskModel:
    def test_from_tuple(self):
        assert Task.from_row((3, "x", 1)) == Task(id=3, title="x", completed=True)

    def test_from_mapping(self):
        assert Task.from_row({"id": 4, "title": "y", "completed": 0}) == Task(4, "y")

    def test_to_dict(self):
        assert Task(1, "a").to_dict() == {"id": 1, "title": "a", "completed": False}


class TestOutOfRangeIds:
    @pytest.mark.asyncio
    async def test_delete_id_beyond_sqlite_integer_removes_nothing(self, store):
        kept = await store.insert("a")
        assert await store.delete(MAX_ROW_ID + 1) == 0
        assert await store.delete(2**70) == 0
        assert await store.list() == [kept]

    @pytest.mark.asyncio
    async def test_delete_max_row_id_is_queried(self, store):
        assert await store.delete(MAX_ROW_ID) == 0

    @pytest.mark.asyncio
    async def test_overflowing_parameter_raises_storage_error(self, store):
        def _insert_huge(conn):
            conn.execute("INSERT INTO todos (id, title) VALUES (?, 'x')", (2**64,))

        with pytest.raises(StorageError) as excinfo:
            await store._call("insert", _insert_huge)
        assert isinstance(excinfo.value.cause, OverflowError)
