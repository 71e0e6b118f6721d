"""Core domain entities."""

from agroledger.core.entities.inventory import (
    DECREASING_MOVEMENTS,
    INCREASING_MOVEMENTS,
    InventoryCategory,
    InventoryItem,
    InventoryMovement,
    MovementReference,
    MovementType,
    ReferenceKind,
    StockStatus,
    compute_total_value,
    derive_stock_status,
)
from agroledger.core.entities.sale import (
    PaymentMethod,
    PaymentStatus,
    ProductType,
    Sale,
    SaleItem,
)

__all__ = [
    # Inventory entities
    "InventoryCategory",
    "InventoryItem",
    "InventoryMovement",
    "MovementReference",
    "MovementType",
    "ReferenceKind",
    "StockStatus",
    "INCREASING_MOVEMENTS",
    "DECREASING_MOVEMENTS",
    "derive_stock_status",
    "compute_total_value",
    # Sale entities
    "Sale",
    "SaleItem",
    "ProductType",
    "PaymentMethod",
    "PaymentStatus",
]
