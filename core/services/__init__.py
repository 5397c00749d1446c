# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .item_service import ItemService

__all__ = [
    "ItemService",
]
