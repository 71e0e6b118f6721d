"""Storage infrastructure implementations."""

from agroledger.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteSalesStore,
    close_pool,
    get_connection,
    get_inventory_store,
    get_pool,
    get_sales_store,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteInventoryStore",
    "SQLiteSalesStore",
    "get_inventory_store",
    "get_sales_store",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
