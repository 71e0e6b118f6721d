"""
Dependency injection container for FastAPI.

Provides the caller's owner id and use case instances to route handlers.
"""

from fastapi import Request

from agroledger.application.use_cases import (
    CreateInventoryItemUseCase,
    CreateSaleUseCase,
    DeleteInventoryItemUseCase,
    DeleteSaleUseCase,
    GetInventoryItemUseCase,
    ListInventoryUseCase,
    ListSalesUseCase,
    RecordMovementUseCase,
    UpdateInventoryItemUseCase,
    UpdateSaleUseCase,
)
from agroledger.config import get_settings
from agroledger.core.exceptions import AuthenticationError


# Owner identity
def get_owner_id(request: Request) -> str:
    """
    Resolve the tenant for this request.

    Identity is established upstream and forwarded in a header; every read
    and write below is scoped to it.
    """
    header = get_settings().api.owner_header
    owner_id = (request.headers.get(header) or "").strip()
    if not owner_id:
        raise AuthenticationError(f"Missing {header} header")
    return owner_id


# Inventory use case dependencies
def get_create_inventory_item_use_case() -> CreateInventoryItemUseCase:
    """Get create inventory item use case."""
    return CreateInventoryItemUseCase()


def get_get_inventory_item_use_case() -> GetInventoryItemUseCase:
    """Get inventory item read use case."""
    return GetInventoryItemUseCase()


def get_list_inventory_use_case() -> ListInventoryUseCase:
    """Get list inventory use case."""
    return ListInventoryUseCase()


def get_update_inventory_item_use_case() -> UpdateInventoryItemUseCase:
    """Get update inventory item use case."""
    return UpdateInventoryItemUseCase()


def get_delete_inventory_item_use_case() -> DeleteInventoryItemUseCase:
    """Get delete inventory item use case."""
    return DeleteInventoryItemUseCase()


def get_record_movement_use_case() -> RecordMovementUseCase:
    """Get record movement use case."""
    return RecordMovementUseCase()


# Sales use case dependencies
def get_create_sale_use_case() -> CreateSaleUseCase:
    """Get create sale use case."""
    return CreateSaleUseCase()


def get_list_sales_use_case() -> ListSalesUseCase:
    """Get list sales use case."""
    return ListSalesUseCase()


def get_delete_sale_use_case() -> DeleteSaleUseCase:
    """Get delete sale use case."""
    return DeleteSaleUseCase()


def get_update_sale_use_case() -> UpdateSaleUseCase:
    """Get update sale use case."""
    return UpdateSaleUseCase()
