"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from agroledger.config import reset_settings
from agroledger.core.entities.inventory import InventoryCategory, InventoryItem
from agroledger.infrastructure.storage.sqlite import connection as conn_module
from agroledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from agroledger.infrastructure.storage.sqlite.migrations.migrator import initialize_database
from agroledger.infrastructure.storage.sqlite.sales_store import SQLiteSalesStore


@pytest.fixture
def temp_db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point storage settings at a temporary database."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STORAGE_DB_NAME", "test.db")
    monkeypatch.setenv("STORAGE_POOL_SIZE", "3")
    monkeypatch.setenv("STORAGE_BUSY_TIMEOUT", "5000")
    reset_settings()
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Create and migrate a temporary database, with a fresh connection pool."""
    await conn_module.close_pool()
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)
    try:
        yield temp_db_path
    finally:
        await conn_module.close_pool()


@pytest.fixture
def inventory_store(initialized_db: Path) -> SQLiteInventoryStore:
    return SQLiteInventoryStore()


@pytest.fixture
def sales_store(initialized_db: Path) -> SQLiteSalesStore:
    return SQLiteSalesStore()


@pytest.fixture
def new_item():
    """Unsaved item factory."""

    def _make(owner_id: str = "owner-1", **overrides) -> InventoryItem:
        fields = {
            "owner_id": owner_id,
            "name": "Maize seed",
            "category": InventoryCategory.SEEDS,
            "quantity": 10.0,
            "unit": "kg",
            "min_quantity": 5.0,
            "unit_cost": 2.0,
        }
        fields.update(overrides)
        return InventoryItem(**fields)

    return _make
