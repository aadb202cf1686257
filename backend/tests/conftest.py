"""
Shared fixtures for state store, service and API tests.
"""

import pytest

from app.config import StorageConfig
from app.core.state_store import StateStore
from fakes import MemoryDocumentAdapter


@pytest.fixture
def storage():
    """Storage locations inside a fake data directory."""
    return StorageConfig(DATA_DIR="/data")


@pytest.fixture
def adapter():
    """In-memory persistence adapter."""
    return MemoryDocumentAdapter()


@pytest.fixture
def store(adapter, storage):
    """Empty state store on the in-memory adapter."""
    return StateStore(adapter=adapter, storage=storage)
