# =============================================================================
# lib/item_store.py - Item Storage Backends
# =============================================================================
# Item rows live behind the ItemStore interface so the service layer does not
# care where they are kept:
# - InMemoryItemStore: process-local, resets on restart (development default)
# - SupabaseItemStore: PostgreSQL "items" table through the Supabase client
#
# Rows are plain dicts with keys: id, name, created_at.
#
# Usage:
#   from lib.item_store import create_item_store
#   store = create_item_store(settings)
#   row = store.create_item("Buy milk")
# =============================================================================

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

from lib.utils import clean_name, utc_now

logger = logging.getLogger(__name__)

ITEM_COLUMNS = "id, name, created_at"


class ItemStore(ABC):
    """
    Storage interface for items.

    Missing ids are never an error at this level: reads return None and
    deletes return False. The service layer decides what a miss means.
    """

    name: str = "abstract"

    @abstractmethod
    def list_items(self, offset: int = 0, limit: int | None = None) -> list[dict[str, Any]]:
        """Return items in ascending id order."""

    @abstractmethod
    def get_item(self, item_id: int) -> dict[str, Any] | None:
        """Return one item or None."""

    @abstractmethod
    def create_item(self, name: str) -> dict[str, Any]:
        """Insert an item and return it with its assigned id."""

    @abstractmethod
    def update_item(self, item_id: int, name: str) -> dict[str, Any] | None:
        """Rename an item. Returns None if it doesn't exist."""

    @abstractmethod
    def delete_item(self, item_id: int) -> bool:
        """Remove an item. Returns False if it doesn't exist."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored items."""

    def ping(self) -> bool:
        """Readiness probe. Backends with remote state override this."""
        return True


# =============================================================================
# In-Memory Backend
# =============================================================================

class InMemoryItemStore(ItemStore):
    """
    Process-local item store.

    Ids come from a counter that only moves forward, so an id is never
    handed out twice even after its item is deleted. All access goes
    through one lock because sync route handlers run in a threadpool.
    """

    name = "memory"

    def __init__(self):
        self._items: dict[int, dict[str, Any]] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def list_items(self, offset: int = 0, limit: int | None = None) -> list[dict[str, Any]]:
        with self._lock:
            rows = [dict(self._items[key]) for key in sorted(self._items)]
        end = None if limit is None else offset + limit
        return rows[offset:end]

    def get_item(self, item_id: int) -> dict[str, Any] | None:
        with self._lock:
            row = self._items.get(item_id)
            return dict(row) if row else None

    def create_item(self, name: str) -> dict[str, Any]:
        with self._lock:
            self._last_id += 1
            row = {
                "id": self._last_id,
                "name": clean_name(name),
                "created_at": utc_now(),
            }
            self._items[row["id"]] = row
            logger.debug(f"Stored item {row['id']} in memory")
            return dict(row)

    def update_item(self, item_id: int, name: str) -> dict[str, Any] | None:
        with self._lock:
            row = self._items.get(item_id)
            if row is None:
                return None
            row["name"] = clean_name(name)
            return dict(row)

    def delete_item(self, item_id: int) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._items)


# =============================================================================
# Supabase (PostgreSQL) Backend
# =============================================================================

class SupabaseItemStore(ItemStore):
    """
    Item store backed by a PostgreSQL table in Supabase.

    Expected table:
        create table items (
            id bigint generated always as identity primary key,
            name text not null,
            created_at timestamptz not null default now()
        );

    Every query failure is raised as SupabaseClientError with a suggestion.
    """

    name = "supabase"

    def __init__(self, table: str = "items", client: Any = None):
        self.table = table
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from lib.supabase_client import SupabaseClient

            self._client = SupabaseClient.get_client()
        return self._client

    def _query_error(self, action: str, error: Exception, **details):
        from lib.supabase_client import SupabaseClientError

        return SupabaseClientError(
            message=f"Failed to {action}: {error}",
            code="ITEM_QUERY_FAILED",
            suggestion=f"Check that the '{self.table}' table exists and the service key can access it",
            details={"table": self.table, **details},
        )

    def list_items(self, offset: int = 0, limit: int | None = None) -> list[dict[str, Any]]:
        try:
            query = self.client.table(self.table).select(ITEM_COLUMNS).order("id")
            if limit is not None:
                query = query.range(offset, offset + limit - 1)
            elif offset:
                query = query.offset(offset)
            response = query.execute()
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} items from {self.table}")
            return rows
        except Exception as e:
            raise self._query_error("list items", e, offset=offset, limit=limit) from e

    def get_item(self, item_id: int) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(self.table)
                .select(ITEM_COLUMNS)
                .eq("id", item_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise self._query_error("fetch item", e, item_id=item_id) from e
        return response.data[0] if response.data else None

    def create_item(self, name: str) -> dict[str, Any]:
        try:
            response = (
                self.client.table(self.table)
                .insert({"name": clean_name(name)})
                .execute()
            )
        except Exception as e:
            raise self._query_error("create item", e) from e

        if not response.data:
            from lib.supabase_client import SupabaseClientError

            raise SupabaseClientError(
                message="Insert returned no data",
                code="ITEM_INSERT_EMPTY",
                suggestion="Check that the service key is allowed to read back inserted rows",
                details={"table": self.table},
            )
        row = response.data[0]
        logger.info(f"Created item {row['id']} in {self.table}")
        return row

    def update_item(self, item_id: int, name: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(self.table)
                .update({"name": clean_name(name)})
                .eq("id", item_id)
                .execute()
            )
        except Exception as e:
            raise self._query_error("update item", e, item_id=item_id) from e
        return response.data[0] if response.data else None

    def delete_item(self, item_id: int) -> bool:
        try:
            response = (
                self.client.table(self.table)
                .delete()
                .eq("id", item_id)
                .execute()
            )
        except Exception as e:
            raise self._query_error("delete item", e, item_id=item_id) from e
        return bool(response.data)

    def count(self) -> int:
        try:
            response = (
                self.client.table(self.table)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise self._query_error("count items", e) from e
        return response.count or 0

    def ping(self) -> bool:
        try:
            self.client.table(self.table).select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Item store ping failed: {e}")
            return False


# =============================================================================
# Factory
# =============================================================================

def create_item_store(settings) -> ItemStore:
    """
    Build the store selected by settings.ITEM_STORE.

    Args:
        settings: Application settings (see app.config.Settings)

    Returns:
        ItemStore: A ready-to-use backend
    """
    if settings.ITEM_STORE == "supabase":
        logger.info(f"Using Supabase item store (table: {settings.ITEMS_TABLE})")
        return SupabaseItemStore(table=settings.ITEMS_TABLE)

    logger.info("Using in-memory item store (data resets on restart)")
    return InMemoryItemStore()
