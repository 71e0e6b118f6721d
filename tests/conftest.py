"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from datetime import datetime

import pytest

from agroledger.config import reset_settings
from agroledger.core.entities.inventory import (
    InventoryCategory,
    InventoryItem,
    InventoryMovement,
    MovementType,
)
from agroledger.core.entities.sale import ProductType, Sale, SaleItem

OWNER = "owner-1"


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Settings are re-read from the environment for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return {"X-Owner-Id": OWNER}


@pytest.fixture
def make_item() -> Callable[..., InventoryItem]:
    """Build an InventoryItem with sensible defaults."""

    def _make(**overrides) -> InventoryItem:
        now = datetime(2026, 10, 1, 8, 0, 0)
        fields = {
            "id": 1,
            "owner_id": OWNER,
            "name": "Maize seed",
            "category": InventoryCategory.SEEDS,
            "quantity": 10.0,
            "unit": "kg",
            "min_quantity": 5.0,
            "unit_cost": 2.0,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return InventoryItem(**fields)

    return _make


@pytest.fixture
def make_movement() -> Callable[..., InventoryMovement]:
    """Build a balanced InventoryMovement."""

    def _make(
        movement_type: MovementType = MovementType.USAGE,
        quantity: float = 3.0,
        previous_quantity: float = 10.0,
        **overrides,
    ) -> InventoryMovement:
        fields = {
            "id": 1,
            "inventory_item_id": 1,
            "owner_id": OWNER,
            "movement_type": movement_type,
            "quantity": quantity,
            "previous_quantity": previous_quantity,
            "new_quantity": movement_type.apply(previous_quantity, quantity),
            "created_at": datetime(2026, 10, 1, 9, 0, 0),
        }
        fields.update(overrides)
        return InventoryMovement(**fields)

    return _make


@pytest.fixture
def make_sale() -> Callable[..., Sale]:
    """Build a one-line sale linked to inventory item 1."""

    def _make(**overrides) -> Sale:
        fields = {
            "id": 1,
            "owner_id": OWNER,
            "sale_number": "SL2610-0001",
            "items": [
                SaleItem(
                    id=1,
                    sale_id=1,
                    product_type=ProductType.CROP,
                    product_name="Maize",
                    quantity=4,
                    unit="kg",
                    unit_price=3.0,
                    inventory_item_id=1,
                )
            ],
            "created_at": datetime(2026, 10, 1, 10, 0, 0),
        }
        fields.update(overrides)
        return Sale(**fields)

    return _make
