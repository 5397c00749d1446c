# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Gives every test a fresh in-memory item store wired into the app
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ["ITEM_STORE"] = "memory"

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_item_store
from app.main import app
from lib.item_store import InMemoryItemStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryItemStore()


@pytest.fixture
def client(store):
    """TestClient whose routes all use the `store` fixture."""
    app.dependency_overrides[get_item_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_item_rows():
    """Rows shaped the way Supabase returns them."""
    return [
        {"id": 1, "name": "Buy milk", "created_at": "2024-01-15T10:30:00+00:00"},
        {"id": 2, "name": "Walk the dog", "created_at": "2024-01-15T10:31:00+00:00"},
        {"id": 5, "name": "Call the bank", "created_at": "2024-01-15T11:00:00+00:00"},
    ]
