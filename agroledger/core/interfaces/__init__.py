"""Core interfaces (abstract base classes)."""

from agroledger.core.interfaces.inventory_store import IInventoryStore
from agroledger.core.interfaces.sales_store import ISalesStore, SaleFilter

__all__ = [
    "IInventoryStore",
    "ISalesStore",
    "SaleFilter",
]
