"""Tests for inventory entities and stock rules."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from agroledger.core.entities.inventory import (
    DECREASING_MOVEMENTS,
    INCREASING_MOVEMENTS,
    InventoryCategory,
    InventoryItem,
    MovementReference,
    MovementType,
    ReferenceKind,
    StockStatus,
    compute_total_value,
    derive_stock_status,
)


class TestDeriveStockStatus:
    def test_zero_is_out_of_stock(self):
        assert derive_stock_status(0, 5) == StockStatus.OUT_OF_STOCK

    def test_zero_wins_over_zero_threshold(self):
        assert derive_stock_status(0, 0) == StockStatus.OUT_OF_STOCK

    def test_at_threshold_is_low(self):
        assert derive_stock_status(5, 5) == StockStatus.LOW_STOCK

    def test_below_threshold_is_low(self):
        assert derive_stock_status(4, 5) == StockStatus.LOW_STOCK

    def test_above_threshold_is_in_stock(self):
        assert derive_stock_status(15, 5) == StockStatus.IN_STOCK

    def test_no_threshold_never_low(self):
        """Without min_quantity any positive quantity is IN_STOCK."""
        assert derive_stock_status(3, None) == StockStatus.IN_STOCK
        assert derive_stock_status(0.001, None) == StockStatus.IN_STOCK


class TestComputeTotalValue:
    def test_with_unit_cost(self):
        assert compute_total_value(15, 2.0) == 30.0

    def test_without_unit_cost(self):
        assert compute_total_value(15, None) is None

    def test_zero_quantity(self):
        assert compute_total_value(0, 2.0) == 0.0


class TestMovementType:
    def test_directions_partition_all_types(self):
        assert INCREASING_MOVEMENTS | DECREASING_MOVEMENTS == set(MovementType)
        assert not INCREASING_MOVEMENTS & DECREASING_MOVEMENTS

    @pytest.mark.parametrize(
        "movement_type", [MovementType.PURCHASE, MovementType.RETURN, MovementType.ADJUSTMENT]
    )
    def test_increasing(self, movement_type):
        assert movement_type.is_increasing
        assert movement_type.apply(10, 4) == 14

    @pytest.mark.parametrize(
        "movement_type",
        [
            MovementType.USAGE,
            MovementType.SALE,
            MovementType.TRANSFER,
            MovementType.EXPIRED,
            MovementType.DAMAGED,
        ],
    )
    def test_decreasing(self, movement_type):
        assert not movement_type.is_increasing
        assert movement_type.apply(10, 4) == 6


class TestInventoryItem:
    def test_derived_fields_computed(self, make_item):
        item = make_item(quantity=15, min_quantity=5, unit_cost=2.0)
        assert item.status == StockStatus.IN_STOCK
        assert item.total_value == 30.0

    def test_supplied_status_is_ignored(self, make_item):
        item = make_item(quantity=0, status=StockStatus.IN_STOCK, total_value=999)
        assert item.status == StockStatus.OUT_OF_STOCK
        assert item.total_value == 0.0

    def test_no_unit_cost_means_no_value(self, make_item):
        item = make_item(unit_cost=None)
        assert item.total_value is None

    def test_refresh_after_change(self, make_item):
        item = make_item(quantity=15, min_quantity=5)
        item.quantity = 4
        item.refresh_derived()
        assert item.status == StockStatus.LOW_STOCK
        assert item.total_value == 8.0

    def test_is_low_stock(self, make_item):
        assert make_item(quantity=5, min_quantity=5).is_low_stock
        assert not make_item(quantity=6, min_quantity=5).is_low_stock
        assert not make_item(quantity=1, min_quantity=None).is_low_stock

    def test_zero_threshold_never_low(self, make_item):
        item = make_item(quantity=0, min_quantity=0)
        assert item.status == StockStatus.OUT_OF_STOCK
        assert not item.is_low_stock

    def test_negative_quantity_rejected(self):
        with pytest.raises(PydanticValidationError):
            InventoryItem(
                owner_id="owner-1",
                name="Urea",
                category=InventoryCategory.FERTILIZERS,
                quantity=-1,
                unit="bags",
            )


class TestInventoryMovement:
    def test_balanced_decrease(self, make_movement):
        movement = make_movement(MovementType.USAGE, quantity=11, previous_quantity=15)
        assert movement.new_quantity == 4

    def test_balanced_increase_from_zero(self, make_movement):
        movement = make_movement(MovementType.RETURN, quantity=4, previous_quantity=0)
        assert movement.previous_quantity == 0
        assert movement.new_quantity == 4

    def test_unbalanced_rejected(self, make_movement):
        with pytest.raises(PydanticValidationError, match="cannot yield"):
            make_movement(
                MovementType.PURCHASE, quantity=5, previous_quantity=10, new_quantity=5
            )

    def test_zero_quantity_rejected(self, make_movement):
        with pytest.raises(PydanticValidationError):
            make_movement(quantity=0, new_quantity=10)

    def test_negative_result_rejected(self, make_movement):
        with pytest.raises(PydanticValidationError):
            make_movement(MovementType.USAGE, quantity=11, previous_quantity=10)

    def test_reference(self, make_movement):
        ref = MovementReference(kind=ReferenceKind.SALE, id="42")
        movement = make_movement(MovementType.SALE, reference=ref)
        assert movement.reference.kind == ReferenceKind.SALE
        assert movement.reference.id == "42"
