# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# Tests swap the store with app.dependency_overrides[get_item_store].
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.item_service import ItemService
from lib.item_store import ItemStore, create_item_store


@lru_cache
def get_item_store() -> ItemStore:
    """
    Get the process-wide item store.

    Built once from settings; every request sees the same store.
    """
    return create_item_store(settings)


def get_item_service(store: Annotated[ItemStore, Depends(get_item_store)]) -> ItemService:
    """Wrap the store in the service layer."""
    return ItemService(store)


# Type alias for dependency injection
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
