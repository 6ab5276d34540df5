# backend/tests/unit/conftest.py
"""Conftest for unit tests - minimal fixtures without database access."""
import pytest
from unittest.mock import MagicMock


@pytest.fixture
def mock_collection():
    """Mock pymongo collection for unit tests."""
    return MagicMock()
