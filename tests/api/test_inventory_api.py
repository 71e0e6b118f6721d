"""API smoke tests for inventory endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from agroledger.api.dependencies import (
    get_create_inventory_item_use_case,
    get_delete_inventory_item_use_case,
    get_get_inventory_item_use_case,
    get_list_inventory_use_case,
    get_record_movement_use_case,
    get_update_inventory_item_use_case,
)
from agroledger.api.main import app
from agroledger.application.use_cases import (
    CreateInventoryItemUseCase,
    DeleteInventoryItemUseCase,
    GetInventoryItemUseCase,
    ListInventoryUseCase,
    RecordMovementUseCase,
    UpdateInventoryItemUseCase,
)
from agroledger.application.use_cases.create_inventory_item import CreateInventoryItemResult
from agroledger.application.use_cases.list_inventory import InventorySummary, ListInventoryResult
from agroledger.core.entities.inventory import MovementType
from agroledger.core.exceptions import InsufficientStockError, InventoryItemNotFoundError
from agroledger.core.services.inventory_ledger import MovementResult


@pytest.fixture
def mock_create_use_case(make_item, make_movement):
    uc = AsyncMock(spec=CreateInventoryItemUseCase)
    item = make_item(quantity=10)
    movement = make_movement(MovementType.PURCHASE, quantity=10, previous_quantity=0)
    item.movements = [movement]
    result = CreateInventoryItemResult(item=item, initial_movement=movement)
    uc.execute.return_value = result
    uc.to_response.return_value = CreateInventoryItemUseCase().to_response(result)
    return uc


@pytest.fixture
def mock_get_use_case(make_item, make_movement):
    uc = AsyncMock(spec=GetInventoryItemUseCase)
    item = make_item()
    movements = [make_movement()]
    uc.execute.return_value = item
    uc.to_response.return_value = GetInventoryItemUseCase().to_response(item)
    uc.list_movements.return_value = movements
    uc.movements_to_response.return_value = GetInventoryItemUseCase.movements_to_response(
        movements, limit=100, offset=0
    )
    return uc


@pytest.fixture
def mock_list_use_case(make_item):
    uc = AsyncMock(spec=ListInventoryUseCase)
    items = [make_item(id=1, quantity=15), make_item(id=2, name="Beans", quantity=4)]
    result = ListInventoryResult(items=items, summary=InventorySummary.of(items))
    uc.execute.return_value = result
    uc.to_response.return_value = ListInventoryUseCase().to_response(result)
    return uc


@pytest.fixture
def mock_update_use_case(make_item):
    uc = AsyncMock(spec=UpdateInventoryItemUseCase)
    item = make_item(location="Barn 2")
    uc.execute.return_value = item
    uc.to_response.return_value = UpdateInventoryItemUseCase().to_response(item)
    return uc


@pytest.fixture
def mock_delete_use_case():
    uc = AsyncMock(spec=DeleteInventoryItemUseCase)
    uc.execute.return_value = None
    return uc


@pytest.fixture
def mock_movement_use_case(make_item, make_movement):
    uc = AsyncMock(spec=RecordMovementUseCase)
    item = make_item(quantity=4)
    movement = make_movement(MovementType.USAGE, quantity=11, previous_quantity=15)
    result = MovementResult(item=item, movement=movement)
    uc.execute.return_value = result
    uc.to_response.return_value = RecordMovementUseCase().to_response(result)
    return uc


@pytest.fixture
async def inv_client(
    mock_create_use_case,
    mock_get_use_case,
    mock_list_use_case,
    mock_update_use_case,
    mock_delete_use_case,
    mock_movement_use_case,
):
    overrides = {
        get_create_inventory_item_use_case: lambda: mock_create_use_case,
        get_get_inventory_item_use_case: lambda: mock_get_use_case,
        get_list_inventory_use_case: lambda: mock_list_use_case,
        get_update_inventory_item_use_case: lambda: mock_update_use_case,
        get_delete_inventory_item_use_case: lambda: mock_delete_use_case,
        get_record_movement_use_case: lambda: mock_movement_use_case,
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dep in overrides:
        app.dependency_overrides.pop(dep, None)


class TestInventoryAPI:
    async def test_owner_header_required(self, inv_client):
        resp = await inv_client.get("/api/inventory")
        assert resp.status_code == 401
        assert resp.json()["error_code"] == "AUTHENTICATION_REQUIRED"

    async def test_create_item(self, inv_client, owner_headers, mock_create_use_case):
        resp = await inv_client.post(
            "/api/inventory",
            json={"name": "Maize seed", "category": "SEEDS", "quantity": 10, "unit": "kg"},
            headers=owner_headers,
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "IN_STOCK"
        assert data["movements"][0]["movement_type"] == "PURCHASE"
        assert mock_create_use_case.execute.call_args.args[0] == "owner-1"

    async def test_create_item_invalid_body(self, inv_client, owner_headers):
        resp = await inv_client.post(
            "/api/inventory",
            json={"name": "Maize seed", "category": "GRAIN", "unit": "kg"},
            headers=owner_headers,
        )
        assert resp.status_code == 422
        assert resp.json()["error_code"] == "VALIDATION_ERROR"

    async def test_list_items(self, inv_client, owner_headers, mock_list_use_case):
        resp = await inv_client.get(
            "/api/inventory",
            params={"category": "SEEDS", "status": "LOW_STOCK", "low_stock": "true"},
            headers=owner_headers,
        )
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["items"]) == 2
        assert data["summary"]["low_stock_count"] == 1
        kwargs = mock_list_use_case.execute.call_args.kwargs
        assert kwargs["status"].value == "LOW_STOCK"
        assert kwargs["low_stock"] is True

    async def test_get_item(self, inv_client, owner_headers):
        resp = await inv_client.get("/api/inventory/1", headers=owner_headers)
        assert resp.status_code == 200
        assert resp.json()["name"] == "Maize seed"

    async def test_get_item_not_found(self, inv_client, owner_headers, mock_get_use_case):
        mock_get_use_case.execute.side_effect = InventoryItemNotFoundError(99)
        resp = await inv_client.get("/api/inventory/99", headers=owner_headers)
        assert resp.status_code == 404
        data = resp.json()
        assert data["error_code"] == "INVENTORY_ITEM_NOT_FOUND"
        assert data["hint"]

    async def test_update_item(self, inv_client, owner_headers):
        resp = await inv_client.patch(
            "/api/inventory/1", json={"location": "Barn 2"}, headers=owner_headers
        )
        assert resp.status_code == 200
        assert resp.json()["location"] == "Barn 2"

    async def test_delete_item(self, inv_client, owner_headers, mock_delete_use_case):
        resp = await inv_client.delete("/api/inventory/1", headers=owner_headers)
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        mock_delete_use_case.execute.assert_awaited_once_with("owner-1", 1)

    async def test_record_movement(self, inv_client, owner_headers):
        resp = await inv_client.post(
            "/api/inventory/1/movements",
            json={"movement_type": "USAGE", "quantity": 11},
            headers=owner_headers,
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["item"]["status"] == "LOW_STOCK"
        assert data["movement"]["previous_quantity"] == 15
        assert data["movement"]["new_quantity"] == 4

    async def test_record_movement_insufficient(
        self, inv_client, owner_headers, mock_movement_use_case
    ):
        mock_movement_use_case.execute.side_effect = InsufficientStockError(1, 1.0, 0.0)
        resp = await inv_client.post(
            "/api/inventory/1/movements",
            json={"movement_type": "USAGE", "quantity": 1},
            headers=owner_headers,
        )
        assert resp.status_code == 400
        data = resp.json()
        assert data["error_code"] == "INSUFFICIENT_STOCK"
        assert '"available": 0.0' in data["detail"]

    async def test_list_movements(self, inv_client, owner_headers, mock_get_use_case):
        resp = await inv_client.get(
            "/api/inventory/1/movements", params={"offset": 0}, headers=owner_headers
        )
        assert resp.status_code == 200
        assert len(resp.json()["movements"]) == 1
        mock_get_use_case.list_movements.assert_awaited_once_with(
            "owner-1", 1, limit=100, offset=0
        )
