# =============================================================================
# tests/test_item_store.py - Item Store Tests
# =============================================================================
# This module contains tests for:
# - InMemoryItemStore ids, ordering, pagination and thread safety
# - SupabaseItemStore query building and error wrapping (mocked client)
# - The create_item_store factory
#
# Tests use a mocked Supabase client to avoid database calls.
# =============================================================================

from __future__ import annotations

import threading
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from lib.item_store import (
    InMemoryItemStore,
    SupabaseItemStore,
    create_item_store,
)
from lib.supabase_client import SupabaseClientError


# =============================================================================
# InMemoryItemStore Tests
# =============================================================================

class TestInMemoryItemStore:
    """Test the process-local store."""

    def test_starts_empty(self, store):
        assert store.list_items() == []
        assert store.count() == 0

    def test_create_assigns_sequential_ids(self, store):
        first = store.create_item("Buy milk")
        second = store.create_item("Walk the dog")

        assert first["id"] == 1
        assert second["id"] == 2
        assert isinstance(first["created_at"], datetime)

    def test_create_strips_name(self, store):
        assert store.create_item("  padded  ")["name"] == "padded"

    def test_create_increases_count_by_one(self, store):
        store.create_item("a")
        before = store.count()

        store.create_item("b")

        assert store.count() == before + 1

    def test_ids_not_reused_after_delete(self, store):
        """Deleting the newest item must not free its id."""
        store.create_item("a")
        second = store.create_item("b")
        store.delete_item(second["id"])

        third = store.create_item("c")

        assert third["id"] == 3

    def test_list_in_id_order(self, store):
        for name in ["a", "b", "c"]:
            store.create_item(name)
        store.delete_item(2)
        store.create_item("d")

        assert [row["id"] for row in store.list_items()] == [1, 3, 4]

    def test_list_offset_and_limit(self, store):
        for name in ["a", "b", "c", "d", "e"]:
            store.create_item(name)

        assert [row["name"] for row in store.list_items(offset=1, limit=2)] == ["b", "c"]
        assert [row["name"] for row in store.list_items(offset=3)] == ["d", "e"]
        assert store.list_items(offset=10) == []

    def test_get_item(self, store):
        created = store.create_item("Buy milk")

        assert store.get_item(created["id"]) == created
        assert store.get_item(99) is None

    def test_returned_rows_are_copies(self, store):
        """Mutating a returned row does not change the store."""
        created = store.create_item("original")
        created["name"] = "mutated"

        assert store.get_item(1)["name"] == "original"

    def test_update_item(self, store):
        store.create_item("old")

        updated = store.update_item(1, " new ")

        assert updated["name"] == "new"
        assert store.get_item(1)["name"] == "new"

    def test_update_missing_returns_none(self, store):
        assert store.update_item(42, "x") is None

    def test_delete_item(self, store):
        store.create_item("a")

        assert store.delete_item(1) is True
        assert store.get_item(1) is None
        assert store.count() == 0

    def test_delete_missing_is_noop(self, store):
        store.create_item("a")

        assert store.delete_item(42) is False
        assert store.count() == 1

    def test_ping(self, store):
        assert store.ping() is True

    def test_concurrent_creates_get_unique_ids(self, store):
        """Ids stay unique when many threads create at once."""
        def worker():
            for _ in range(50):
                store.create_item("x")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [row["id"] for row in store.list_items()]
        assert len(ids) == 400
        assert len(set(ids)) == 400
        assert ids == list(range(1, 401))


# =============================================================================
# SupabaseItemStore Tests
# =============================================================================

class TestSupabaseItemStore:
    """Test the Supabase-backed store with a mocked client."""

    @pytest.fixture
    def mock_client(self):
        return MagicMock()

    @pytest.fixture
    def supabase_store(self, mock_client):
        return SupabaseItemStore(table="items", client=mock_client)

    def test_list_items_ordered_by_id(self, supabase_store, mock_client, sample_item_rows):
        query = mock_client.table.return_value.select.return_value.order.return_value
        query.execute.return_value = MagicMock(data=sample_item_rows)

        rows = supabase_store.list_items()

        assert rows == sample_item_rows
        mock_client.table.assert_called_with("items")
        mock_client.table.return_value.select.return_value.order.assert_called_once_with("id")
        query.range.assert_not_called()

    def test_list_items_with_limit_uses_range(self, supabase_store, mock_client, sample_item_rows):
        query = mock_client.table.return_value.select.return_value.order.return_value
        query.range.return_value.execute.return_value = MagicMock(data=sample_item_rows[:2])

        rows = supabase_store.list_items(offset=2, limit=2)

        assert len(rows) == 2
        query.range.assert_called_once_with(2, 3)

    def test_list_items_with_offset_only(self, supabase_store, mock_client):
        query = mock_client.table.return_value.select.return_value.order.return_value
        query.offset.return_value.execute.return_value = MagicMock(data=[])

        assert supabase_store.list_items(offset=5) == []
        query.offset.assert_called_once_with(5)

    def test_get_item(self, supabase_store, mock_client, sample_item_rows):
        chain = mock_client.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = MagicMock(data=[sample_item_rows[0]])

        assert supabase_store.get_item(1) == sample_item_rows[0]
        mock_client.table.return_value.select.return_value.eq.assert_called_once_with("id", 1)

    def test_get_missing_item(self, supabase_store, mock_client):
        chain = mock_client.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = MagicMock(data=[])

        assert supabase_store.get_item(99) is None

    def test_create_item_inserts_clean_name(self, supabase_store, mock_client, sample_item_rows):
        insert = mock_client.table.return_value.insert
        insert.return_value.execute.return_value = MagicMock(data=[sample_item_rows[0]])

        row = supabase_store.create_item("  Buy milk ")

        assert row["id"] == 1
        insert.assert_called_once_with({"name": "Buy milk"})

    def test_create_item_empty_response(self, supabase_store, mock_client):
        insert = mock_client.table.return_value.insert
        insert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(SupabaseClientError) as exc_info:
            supabase_store.create_item("x")

        assert exc_info.value.code == "ITEM_INSERT_EMPTY"

    def test_update_missing_item(self, supabase_store, mock_client):
        chain = mock_client.table.return_value.update.return_value.eq.return_value
        chain.execute.return_value = MagicMock(data=[])

        assert supabase_store.update_item(7, "x") is None

    def test_delete_item(self, supabase_store, mock_client, sample_item_rows):
        chain = mock_client.table.return_value.delete.return_value.eq.return_value
        chain.execute.return_value = MagicMock(data=[sample_item_rows[0]])

        assert supabase_store.delete_item(1) is True

    def test_delete_missing_item(self, supabase_store, mock_client):
        chain = mock_client.table.return_value.delete.return_value.eq.return_value
        chain.execute.return_value = MagicMock(data=[])

        assert supabase_store.delete_item(1) is False

    def test_count(self, supabase_store, mock_client):
        chain = mock_client.table.return_value.select.return_value.limit.return_value
        chain.execute.return_value = MagicMock(count=3)

        assert supabase_store.count() == 3
        mock_client.table.return_value.select.assert_called_once_with("id", count="exact")

    def test_query_failure_wrapped(self, supabase_store, mock_client):
        """Client errors become SupabaseClientError with a suggestion."""
        mock_client.table.side_effect = RuntimeError("connection refused")

        with pytest.raises(SupabaseClientError) as exc_info:
            supabase_store.delete_item(1)

        error = exc_info.value
        assert error.code == "ITEM_QUERY_FAILED"
        assert "connection refused" in error.message
        assert error.suggestion
        assert error.details["item_id"] == 1

    def test_ping(self, supabase_store, mock_client):
        assert supabase_store.ping() is True

        mock_client.table.side_effect = RuntimeError("down")
        assert supabase_store.ping() is False


# =============================================================================
# Factory Tests
# =============================================================================

class TestCreateItemStore:
    """Test backend selection."""

    def test_memory(self):
        store = create_item_store(SimpleNamespace(ITEM_STORE="memory", ITEMS_TABLE="items"))

        assert isinstance(store, InMemoryItemStore)

    def test_supabase(self):
        store = create_item_store(SimpleNamespace(ITEM_STORE="supabase", ITEMS_TABLE="todo_items"))

        assert isinstance(store, SupabaseItemStore)
        assert store.table == "todo_items"
