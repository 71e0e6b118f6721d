"""Inventory domain entities and stock rules."""

import math
from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


def utcnow() -> datetime:
    """Naive UTC timestamp, the format stored in SQLite."""
    return datetime.now(UTC).replace(tzinfo=None)


class InventoryCategory(str, Enum):
    """Kinds of farm inputs tracked in inventory."""

    SEEDS = "SEEDS"
    FERTILIZERS = "FERTILIZERS"
    PESTICIDES = "PESTICIDES"
    HERBICIDES = "HERBICIDES"
    FUNGICIDES = "FUNGICIDES"
    ANIMAL_FEED = "ANIMAL_FEED"
    VETERINARY_DRUGS = "VETERINARY_DRUGS"
    VACCINES = "VACCINES"
    EQUIPMENT = "EQUIPMENT"
    TOOLS = "TOOLS"
    PACKAGING = "PACKAGING"
    FUEL = "FUEL"
    OTHER = "OTHER"


class StockStatus(str, Enum):
    """Stock-level classification derived from quantity and min_quantity."""

    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


class MovementType(str, Enum):
    """Types of stock movements. The direction of each type is fixed."""

    PURCHASE = "PURCHASE"
    USAGE = "USAGE"
    SALE = "SALE"
    ADJUSTMENT = "ADJUSTMENT"
    TRANSFER = "TRANSFER"
    RETURN = "RETURN"
    EXPIRED = "EXPIRED"
    DAMAGED = "DAMAGED"

    @property
    def is_increasing(self) -> bool:
        return self in INCREASING_MOVEMENTS

    def apply(self, previous_quantity: float, quantity: float) -> float:
        """Quantity after applying a movement of this type."""
        if self.is_increasing:
            return previous_quantity + quantity
        return previous_quantity - quantity


INCREASING_MOVEMENTS = frozenset(
    {MovementType.PURCHASE, MovementType.RETURN, MovementType.ADJUSTMENT}
)
DECREASING_MOVEMENTS = frozenset(set(MovementType) - INCREASING_MOVEMENTS)


class ReferenceKind(str, Enum):
    """What caused a movement."""

    SALE = "sale"
    SALE_DELETED = "sale_deleted"
    PURCHASE = "purchase"
    TRANSFER = "transfer"


class MovementReference(BaseModel):
    """Typed pointer to the record that caused a movement."""

    kind: ReferenceKind
    id: str


def derive_stock_status(quantity: float, min_quantity: float | None) -> StockStatus:
    """
    Classify stock level.

    Zero quantity is always OUT_OF_STOCK, even when min_quantity is 0.
    LOW_STOCK only applies when a threshold is configured.
    """
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if min_quantity is not None and quantity <= min_quantity:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def compute_total_value(quantity: float, unit_cost: float | None) -> float | None:
    """Stock value, or None when the item has no unit cost."""
    if unit_cost is None:
        return None
    return quantity * unit_cost


class InventoryMovement(BaseModel):
    """A single append-only ledger line."""

    id: int | None = None
    inventory_item_id: int  # FK → inventory_items.id
    owner_id: str
    movement_type: MovementType
    quantity: float = Field(gt=0)  # magnitude, direction comes from movement_type
    previous_quantity: float = Field(ge=0)
    new_quantity: float = Field(ge=0)
    notes: str | None = None
    reference: MovementReference | None = None
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def check_balance(self) -> "InventoryMovement":
        """new_quantity must follow from previous_quantity and the movement direction."""
        expected = self.movement_type.apply(self.previous_quantity, self.quantity)
        if not math.isclose(expected, self.new_quantity, abs_tol=1e-9):
            raise ValueError(
                f"{self.movement_type.value} of {self.quantity} from "
                f"{self.previous_quantity} cannot yield {self.new_quantity}"
            )
        return self


class InventoryItem(BaseModel):
    """An owner's stock of one farm input."""

    id: int | None = None
    owner_id: str
    name: str
    category: InventoryCategory
    sku: str | None = None
    quantity: float = Field(default=0.0, ge=0)
    unit: str
    min_quantity: float | None = Field(default=None, ge=0)
    max_quantity: float | None = Field(default=None, ge=0)
    unit_cost: float | None = Field(default=None, ge=0)
    total_value: float | None = None
    status: StockStatus = StockStatus.OUT_OF_STOCK
    supplier_name: str | None = None
    location: str | None = None
    expiry_date: date | None = None
    batch_number: str | None = None
    farm_id: str | None = None
    movements: list[InventoryMovement] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def compute_derived(self) -> "InventoryItem":
        """Derive status and total_value; stored values are never trusted."""
        self.refresh_derived()
        return self

    def refresh_derived(self) -> None:
        """Recompute status and total_value after quantity, min_quantity or unit_cost change."""
        self.status = derive_stock_status(self.quantity, self.min_quantity)
        self.total_value = compute_total_value(self.quantity, self.unit_cost)

    @property
    def is_low_stock(self) -> bool:
        """At or under a positive reorder threshold; a threshold of 0 never alerts."""
        return bool(self.min_quantity) and self.quantity <= self.min_quantity  # type: ignore[operator]
