"""Tests for RecordMovementUseCase."""

import pytest

from agroledger.application.dto.requests import RecordMovementRequest
from agroledger.application.use_cases.record_movement import (
    RecordMovementUseCase,
    build_reference,
)
from agroledger.core.entities.inventory import MovementType, ReferenceKind, StockStatus
from agroledger.core.exceptions import InsufficientStockError, ValidationError
from agroledger.core.services.inventory_ledger import InventoryLedger


@pytest.fixture
def use_case(mock_inventory_store):
    ledger = InventoryLedger(mock_inventory_store, recent_movements_limit=10)
    return RecordMovementUseCase(inventory_store=mock_inventory_store, ledger=ledger)


class TestBuildReference:
    def test_no_reference(self):
        assert build_reference(RecordMovementRequest(movement_type="USAGE", quantity=1)) is None

    def test_full_reference(self):
        request = RecordMovementRequest(
            movement_type="TRANSFER", quantity=1, reference_type="transfer", reference_id="T-9"
        )
        ref = build_reference(request)
        assert ref.kind == ReferenceKind.TRANSFER
        assert ref.id == "T-9"

    def test_id_without_type(self):
        request = RecordMovementRequest(movement_type="USAGE", quantity=1, reference_id="5")
        with pytest.raises(ValidationError) as exc_info:
            build_reference(request)
        assert exc_info.value.details["field"] == "reference_type"

    def test_type_without_id(self):
        request = RecordMovementRequest(movement_type="USAGE", quantity=1, reference_type="sale")
        with pytest.raises(ValidationError) as exc_info:
            build_reference(request)
        assert exc_info.value.details["field"] == "reference_id"


class TestRecordMovementUseCase:
    async def test_usage(self, use_case, mock_inventory_store, make_item, make_movement):
        item = make_item(quantity=4, min_quantity=5)
        movement = make_movement(MovementType.USAGE, quantity=11, previous_quantity=15)
        mock_inventory_store.apply_movement.return_value = (item, movement)

        request = RecordMovementRequest(movement_type="USAGE", quantity=11, notes="Field A")
        result = await use_case.execute("owner-1", 1, request)

        assert result.item.status == StockStatus.LOW_STOCK
        assert mock_inventory_store.apply_movement.call_args.kwargs["notes"] == "Field A"

        response = use_case.to_response(result)
        assert response.item.quantity == 4
        assert response.item.total_value == 8.0
        assert response.movement.previous_quantity == 15
        assert response.movement.new_quantity == 4

    async def test_bad_type_rejected(self, use_case, mock_inventory_store):
        request = RecordMovementRequest(movement_type="usage-ish", quantity=1)
        with pytest.raises(ValidationError):
            await use_case.execute("owner-1", 1, request)
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_insufficient(self, use_case, mock_inventory_store):
        mock_inventory_store.apply_movement.side_effect = InsufficientStockError(1, 1.0, 0.0)
        request = RecordMovementRequest(movement_type="USAGE", quantity=1)
        with pytest.raises(InsufficientStockError):
            await use_case.execute("owner-1", 1, request)

    async def test_reference_forwarded(self, use_case, mock_inventory_store, make_item, make_movement):
        mock_inventory_store.apply_movement.return_value = (
            make_item(quantity=14),
            make_movement(MovementType.RETURN, quantity=4),
        )
        request = RecordMovementRequest(
            movement_type="RETURN", quantity=4, reference_type="purchase", reference_id="PO-1"
        )
        await use_case.execute("owner-1", 1, request)

        ref = mock_inventory_store.apply_movement.call_args.kwargs["reference"]
        assert ref.kind == ReferenceKind.PURCHASE
        assert ref.id == "PO-1"
