"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class ProviderHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVENTORY_ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class MessageResponse(BaseModel):
    """Acknowledgement for operations without a body."""

    success: bool = True
    message: str


# --- Inventory ---


class InventoryMovementResponse(BaseModel):
    """Ledger line response DTO."""

    id: int
    inventory_item_id: int
    movement_type: str
    quantity: float
    previous_quantity: float
    new_quantity: float
    notes: str | None = None
    reference_type: str | None = None
    reference_id: str | None = None
    created_at: datetime


class InventoryItemResponse(BaseModel):
    """Inventory item response DTO."""

    id: int
    name: str
    category: str
    sku: str | None = None
    quantity: float
    unit: str
    min_quantity: float | None = None
    max_quantity: float | None = None
    unit_cost: float | None = None
    total_value: float | None = None
    status: str
    supplier_name: str | None = None
    location: str | None = None
    expiry_date: date | None = None
    batch_number: str | None = None
    farm_id: str | None = None
    movements: list[InventoryMovementResponse] = Field(
        default_factory=list, description="Most recent movements, newest first"
    )
    created_at: datetime
    updated_at: datetime


class InventorySummaryResponse(BaseModel):
    """Aggregates over the listed items."""

    total_items: int
    total_value: float
    low_stock_count: int
    out_of_stock_count: int
    by_category: dict[str, int] = Field(default_factory=dict)


class InventoryListResponse(BaseModel):
    """Inventory list with summary."""

    items: list[InventoryItemResponse]
    summary: InventorySummaryResponse


class RecordMovementResponse(BaseModel):
    """Response for a recorded movement."""

    item: InventoryItemResponse
    movement: InventoryMovementResponse


class MovementListResponse(BaseModel):
    """A page of ledger lines."""

    movements: list[InventoryMovementResponse]
    limit: int
    offset: int


# --- Sales ---


class SaleItemResponse(BaseModel):
    """Sale line response DTO."""

    id: int
    product_type: str
    product_name: str
    quantity: float
    unit: str
    unit_price: float
    total_price: float
    inventory_item_id: int | None = None


class SaleResponse(BaseModel):
    """Sale response DTO."""

    id: int
    sale_number: str
    sale_date: date
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_address: str | None = None
    subtotal: float
    discount: float
    tax: float
    total_amount: float
    payment_method: str | None = None
    payment_status: str
    paid_amount: float
    paid_at: datetime | None = None
    notes: str | None = None
    items: list[SaleItemResponse]
    created_at: datetime


class SalePaginationResponse(BaseModel):
    """Page position within the sales list."""

    page: int
    limit: int
    total: int
    pages: int


class SalesSummaryResponse(BaseModel):
    """Totals over all of an owner's sales."""

    total_sales: int
    total_revenue: float
    total_received: float
    pending_amount: float


class SaleListResponse(BaseModel):
    """Paginated list of sales."""

    sales: list[SaleResponse]
    pagination: SalePaginationResponse
    summary: SalesSummaryResponse
