# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Itemstack API:
# - test_models.py: Pydantic model validation
# - test_item_store.py: Storage backends
# - test_item_service.py: Service layer
# - test_items_api.py: /items endpoints
# - test_websocket.py: Change feed
# - test_health.py / test_config.py: Health checks and settings
#
# Run tests with: poetry run pytest
# =============================================================================
