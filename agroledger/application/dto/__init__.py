"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from agroledger.application.dto.requests import (
    CreateInventoryItemRequest,
    CreateSaleItemRequest,
    CreateSaleRequest,
    RecordMovementRequest,
    UpdateInventoryItemRequest,
    UpdateSaleRequest,
)
from agroledger.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryMovementResponse,
    InventorySummaryResponse,
    MessageResponse,
    MovementListResponse,
    ProviderHealthResponse,
    RecordMovementResponse,
    SaleItemResponse,
    SaleListResponse,
    SalePaginationResponse,
    SaleResponse,
    SalesSummaryResponse,
)

__all__ = [
    # Requests
    "CreateInventoryItemRequest",
    "UpdateInventoryItemRequest",
    "UpdateSaleRequest",
    "RecordMovementRequest",
    "CreateSaleItemRequest",
    "CreateSaleRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "MessageResponse",
    "InventoryItemResponse",
    "InventoryMovementResponse",
    "InventorySummaryResponse",
    "InventoryListResponse",
    "RecordMovementResponse",
    "MovementListResponse",
    "SaleItemResponse",
    "SaleResponse",
    "SalePaginationResponse",
    "SalesSummaryResponse",
    "SaleListResponse",
]
