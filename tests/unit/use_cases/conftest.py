"""Shared fixtures for use case tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def tx_conn():
    """Stand-in for the connection yielded by store.transaction()."""
    return MagicMock(name="conn")


@pytest.fixture
def mock_inventory_store(tx_conn):
    store = AsyncMock()
    tx = MagicMock()
    tx.__aenter__.return_value = tx_conn
    tx.__aexit__.return_value = False
    store.transaction = MagicMock(return_value=tx)
    return store


@pytest.fixture
def mock_sales_store():
    return AsyncMock()
