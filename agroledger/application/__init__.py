"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the inventory ledger and stores

Use cases are the only entry point for API handlers.
"""

from agroledger.application.dto import (
    CreateInventoryItemRequest,
    CreateSaleRequest,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    RecordMovementRequest,
    RecordMovementResponse,
    SaleListResponse,
    SaleResponse,
    UpdateInventoryItemRequest,
)
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
)

__all__ = [
    # Request DTOs
    "CreateInventoryItemRequest",
    "UpdateInventoryItemRequest",
    "RecordMovementRequest",
    "CreateSaleRequest",
    # Response DTOs
    "InventoryItemResponse",
    "InventoryListResponse",
    "RecordMovementResponse",
    "SaleResponse",
    "SaleListResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "CreateInventoryItemUseCase",
    "GetInventoryItemUseCase",
    "ListInventoryUseCase",
    "UpdateInventoryItemUseCase",
    "DeleteInventoryItemUseCase",
    "RecordMovementUseCase",
    "CreateSaleUseCase",
    "ListSalesUseCase",
    "DeleteSaleUseCase",
]
