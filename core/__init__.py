# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the item domain:
# - models/: Pydantic schemas for request and response validation
# - services/: ItemService, the only path from routes to storage
#
# Storage backends live in lib/; HTTP concerns live in app/.
# =============================================================================
