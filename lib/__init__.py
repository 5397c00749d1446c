# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable storage and helper code:
# - item_store.py: ItemStore interface with in-memory and Supabase backends
# - supabase_client.py: Shared Supabase client for the PostgreSQL backend
# - utils.py: Shared utilities (error base class, time, name cleanup)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.item_store import (
    ItemStore,
    InMemoryItemStore,
    SupabaseItemStore,
    create_item_store,
)
from lib.utils import ApplicationError, clean_name, utc_now

__all__ = [
    # Stores
    "ItemStore",
    "InMemoryItemStore",
    "SupabaseItemStore",
    "create_item_store",
    # Utils
    "ApplicationError",
    "clean_name",
    "utc_now",
]
