"""Sale domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from agroledger.core.entities.inventory import utcnow


class ProductType(str, Enum):
    """What kind of farm produce a sale line is for."""

    CROP = "CROP"
    LIVESTOCK = "LIVESTOCK"
    EGGS = "EGGS"
    MILK = "MILK"
    FISH = "FISH"
    PRODUCE = "PRODUCE"
    OTHER = "OTHER"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    MOBILE_MONEY = "MOBILE_MONEY"
    BANK_TRANSFER = "BANK_TRANSFER"
    CREDIT = "CREDIT"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


# Closed sales keep their status until they are paid in full
_CLOSED_STATUSES = {PaymentStatus.CANCELLED, PaymentStatus.REFUNDED}


class SaleItem(BaseModel):
    """A single line on a sale."""

    id: int | None = None
    sale_id: int | None = None
    product_type: ProductType
    product_name: str
    quantity: float = Field(gt=0)
    unit: str
    unit_price: float = Field(ge=0)
    total_price: float = 0.0  # quantity * unit_price
    inventory_item_id: int | None = None  # FK → inventory_items.id, stock is deducted when set

    @model_validator(mode="after")
    def compute_line(self) -> "SaleItem":
        """Compute total_price from quantity and unit_price."""
        self.total_price = self.quantity * self.unit_price
        return self


class Sale(BaseModel):
    """A sale of farm produce with line items and payment tracking."""

    id: int | None = None
    owner_id: str
    sale_number: str = ""
    sale_date: date = Field(default_factory=date.today)
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_address: str | None = None
    subtotal: float = 0.0
    discount: float = 0.0
    tax: float = 0.0
    total_amount: float = 0.0
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: float = 0.0
    paid_at: datetime | None = None
    notes: str | None = None
    items: list[SaleItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def compute_totals(self) -> "Sale":
        """Compute subtotal and total_amount from items, discount and tax."""
        if self.items:
            self.subtotal = sum(i.total_price for i in self.items)
        self.total_amount = self.subtotal - self.discount + self.tax
        return self

    def settle_payment_status(self) -> None:
        """Derive payment status from the amount paid so far.

        Paid in full always wins; a part payment moves an open sale to PARTIAL.
        paid_at is stamped the first time the sale becomes PAID.
        """
        if self.paid_amount >= self.total_amount:
            self.payment_status = PaymentStatus.PAID
        elif self.paid_amount > 0 and self.payment_status not in _CLOSED_STATUSES:
            self.payment_status = PaymentStatus.PARTIAL
        if self.payment_status == PaymentStatus.PAID and self.paid_at is None:
            self.paid_at = utcnow()

    @property
    def stock_lines(self) -> list[SaleItem]:
        """Lines that move inventory."""
        return [i for i in self.items if i.inventory_item_id is not None]
