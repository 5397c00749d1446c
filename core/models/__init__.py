# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - item.py: Item CRUD schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .item import (
    NAME_MAX_LENGTH,
    Item,
    ItemCreate,
    ItemDeleteResponse,
    ItemUpdate,
)

__all__ = [
    "NAME_MAX_LENGTH",
    "Item",
    "ItemCreate",
    "ItemDeleteResponse",
    "ItemUpdate",
]
