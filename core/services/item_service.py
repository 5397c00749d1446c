# =============================================================================
# core/services/item_service.py - Item Business Logic
# =============================================================================
# Handles item CRUD operations and business logic.
# Separates HTTP concerns from storage details.
# =============================================================================

import logging

from lib.item_store import ItemStore
from lib.utils import ApplicationError
from core.models.item import Item, ItemCreate, ItemUpdate
from app.exceptions import ItemNotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)


class ItemService:
    """
    Service for item management operations.

    Provides a clean interface between API routes and the item store.
    Store failures are logged and re-raised as StoreUnavailableError.
    """

    def __init__(self, store: ItemStore):
        self.store = store

    def _unavailable(self, action: str, error: ApplicationError) -> StoreUnavailableError:
        logger.error(f"Failed to {action}: {error}")
        return StoreUnavailableError(error.message, suggestion=error.suggestion)

    def list_items(self, offset: int = 0, limit: int | None = None) -> list[Item]:
        """
        List items in ascending id order.

        Args:
            offset: Number of items to skip
            limit: Maximum number of items to return (None for all)
        """
        try:
            rows = self.store.list_items(offset=offset, limit=limit)
        except ApplicationError as e:
            raise self._unavailable("list items", e) from e
        return [Item.model_validate(row) for row in rows]

    def get_item(self, item_id: int) -> Item:
        """
        Get an item by ID.

        Raises:
            ItemNotFoundError: If the item doesn't exist
        """
        try:
            row = self.store.get_item(item_id)
        except ApplicationError as e:
            raise self._unavailable("fetch item", e) from e

        if row is None:
            raise ItemNotFoundError(item_id)
        return Item.model_validate(row)

    def create_item(self, data: ItemCreate) -> Item:
        """Create a new item and return it with its assigned id."""
        try:
            row = self.store.create_item(data.name)
        except ApplicationError as e:
            raise self._unavailable("create item", e) from e

        item = Item.model_validate(row)
        logger.info(f"Created item: {item.id}")
        return item

    def update_item(self, item_id: int, data: ItemUpdate) -> Item:
        """
        Rename an item.

        Raises:
            ItemNotFoundError: If the item doesn't exist
        """
        try:
            row = self.store.update_item(item_id, data.name)
        except ApplicationError as e:
            raise self._unavailable("update item", e) from e

        if row is None:
            raise ItemNotFoundError(item_id)
        logger.info(f"Updated item: {item_id}")
        return Item.model_validate(row)

    def delete_item(self, item_id: int) -> bool:
        """
        Delete an item.

        Returns:
            True if an item was removed, False if the id didn't exist
        """
        try:
            deleted = self.store.delete_item(item_id)
        except ApplicationError as e:
            raise self._unavailable("delete item", e) from e

        if deleted:
            logger.info(f"Deleted item: {item_id}")
        else:
            logger.debug(f"Delete of missing item {item_id} ignored")
        return deleted

    def count(self) -> int:
        """Total number of items in the store."""
        try:
            return self.store.count()
        except ApplicationError as e:
            raise self._unavailable("count items", e) from e
