"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date

from pydantic import BaseModel, Field

from agroledger.core.entities.inventory import InventoryCategory, ReferenceKind
from agroledger.core.entities.sale import PaymentMethod, PaymentStatus, ProductType

# --- Inventory ---


class CreateInventoryItemRequest(BaseModel):
    """Request to create an inventory item.

    A positive opening quantity is recorded as an initial PURCHASE movement.
    """

    name: str = Field(..., min_length=1, description="Item name")
    category: InventoryCategory = Field(..., description="Input category")
    sku: str | None = Field(default=None, description="Stock keeping unit")
    quantity: float = Field(default=0.0, ge=0, description="Opening stock on hand")
    unit: str = Field(..., min_length=1, description="Unit of measure", examples=["kg", "bags"])
    min_quantity: float | None = Field(
        default=None, ge=0, description="Reorder threshold for LOW_STOCK"
    )
    max_quantity: float | None = Field(default=None, ge=0, description="Storage capacity")
    unit_cost: float | None = Field(default=None, ge=0, description="Cost per unit")
    supplier_name: str | None = Field(default=None, description="Supplier name")
    location: str | None = Field(default=None, description="Storage location")
    expiry_date: date | None = Field(default=None, description="Expiry date (ISO format)")
    batch_number: str | None = Field(default=None, description="Batch or lot number")
    farm_id: str | None = Field(default=None, description="Farm the stock belongs to")


class UpdateInventoryItemRequest(BaseModel):
    """Metadata update. Quantity only changes through movements."""

    name: str | None = Field(default=None, min_length=1)
    category: InventoryCategory | None = None
    sku: str | None = None
    min_quantity: float | None = Field(default=None, ge=0)
    max_quantity: float | None = Field(default=None, ge=0)
    unit_cost: float | None = Field(default=None, ge=0)
    supplier_name: str | None = None
    location: str | None = None
    expiry_date: date | None = None
    batch_number: str | None = None


class RecordMovementRequest(BaseModel):
    """Request to record a stock movement.

    movement_type and quantity are checked by the ledger so that a bad value
    is reported as a domain validation error.
    """

    movement_type: str = Field(
        ...,
        description="PURCHASE, USAGE, SALE, ADJUSTMENT, TRANSFER, RETURN, EXPIRED or DAMAGED",
        examples=["USAGE"],
    )
    quantity: float = Field(..., description="Positive quantity to move")
    notes: str | None = Field(default=None, description="Additional notes")
    reference_type: ReferenceKind | None = Field(
        default=None, description="What caused the movement"
    )
    reference_id: str | None = Field(default=None, description="ID of the causing record")


# --- Sales ---


class CreateSaleItemRequest(BaseModel):
    """A single line on a sale."""

    product_type: ProductType = Field(..., description="Kind of produce")
    product_name: str = Field(..., min_length=1, description="Product name")
    quantity: float = Field(..., gt=0, description="Quantity sold")
    unit: str = Field(..., min_length=1, description="Unit of measure")
    unit_price: float = Field(..., ge=0, description="Selling price per unit")
    inventory_item_id: int | None = Field(
        default=None, description="Inventory item to deduct stock from"
    )


class CreateSaleRequest(BaseModel):
    """Request to record a sale."""

    sale_date: date | None = Field(default=None, description="Sale date (defaults to today)")
    customer_name: str | None = Field(default=None, description="Customer name")
    customer_phone: str | None = Field(default=None, description="Customer phone")
    customer_email: str | None = Field(default=None, description="Customer email")
    customer_address: str | None = Field(default=None, description="Customer address")
    discount: float = Field(default=0.0, ge=0, description="Discount amount")
    tax: float = Field(default=0.0, ge=0, description="Tax amount")
    payment_method: PaymentMethod | None = Field(default=None, description="Payment method")
    payment_status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        description="Initial status; raised to PARTIAL or PAID by paid_amount",
    )
    paid_amount: float = Field(default=0.0, ge=0, description="Amount received")
    notes: str | None = Field(default=None, description="Additional notes")
    items: list[CreateSaleItemRequest] = Field(
        ..., min_length=1, description="Line items sold"
    )


class UpdateSaleRequest(BaseModel):
    """Record a later payment or correct customer details.

    Lines, totals and stock are fixed once the sale is created.
    """

    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_address: str | None = None
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus | None = Field(
        default=None, description="CANCELLED or REFUNDED survive a part payment"
    )
    paid_amount: float | None = Field(default=None, ge=0, description="Total received so far")
    notes: str | None = None
