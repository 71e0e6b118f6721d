"""Application use cases."""

from agroledger.application.use_cases.create_inventory_item import (
    CreateInventoryItemResult,
    CreateInventoryItemUseCase,
)
from agroledger.application.use_cases.create_sale import CreateSaleResult, CreateSaleUseCase
from agroledger.application.use_cases.delete_inventory_item import DeleteInventoryItemUseCase
from agroledger.application.use_cases.delete_sale import DeleteSaleResult, DeleteSaleUseCase
from agroledger.application.use_cases.get_inventory_item import GetInventoryItemUseCase
from agroledger.application.use_cases.list_inventory import (
    InventorySummary,
    ListInventoryResult,
    ListInventoryUseCase,
)
from agroledger.application.use_cases.list_sales import ListSalesResult, ListSalesUseCase
from agroledger.application.use_cases.record_movement import RecordMovementUseCase
from agroledger.application.use_cases.update_inventory_item import UpdateInventoryItemUseCase
from agroledger.application.use_cases.update_sale import UpdateSaleUseCase

__all__ = [
    "CreateInventoryItemUseCase",
    "CreateInventoryItemResult",
    "GetInventoryItemUseCase",
    "ListInventoryUseCase",
    "ListInventoryResult",
    "InventorySummary",
    "UpdateInventoryItemUseCase",
    "DeleteInventoryItemUseCase",
    "RecordMovementUseCase",
    "CreateSaleUseCase",
    "CreateSaleResult",
    "ListSalesUseCase",
    "ListSalesResult",
    "UpdateSaleUseCase",
    "DeleteSaleUseCase",
    "DeleteSaleResult",
]
