"""SQLite storage implementations."""

from agroledger.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    join_transaction,
)
from agroledger.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from agroledger.infrastructure.storage.sqlite.sales_store import SQLiteSalesStore

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_sales_store: SQLiteSalesStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_sales_store() -> SQLiteSalesStore:
    """Get singleton sales store instance."""
    global _sales_store
    if _sales_store is None:
        _sales_store = SQLiteSalesStore()
    return _sales_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "join_transaction",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteSalesStore",
    # Factory functions
    "get_inventory_store",
    "get_sales_store",
]
