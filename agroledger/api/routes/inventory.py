"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, Query, status

from agroledger.api.dependencies import (
    get_create_inventory_item_use_case,
    get_delete_inventory_item_use_case,
    get_get_inventory_item_use_case,
    get_list_inventory_use_case,
    get_owner_id,
    get_record_movement_use_case,
    get_update_inventory_item_use_case,
)
from agroledger.application.dto.requests import (
    CreateInventoryItemRequest,
    RecordMovementRequest,
    UpdateInventoryItemRequest,
)
from agroledger.application.dto.responses import (
    ErrorResponse,
    InventoryItemResponse,
    InventoryListResponse,
    MessageResponse,
    MovementListResponse,
    RecordMovementResponse,
)
from agroledger.application.use_cases import (
    CreateInventoryItemUseCase,
    DeleteInventoryItemUseCase,
    GetInventoryItemUseCase,
    ListInventoryUseCase,
    RecordMovementUseCase,
    UpdateInventoryItemUseCase,
)
from agroledger.core.entities.inventory import InventoryCategory, StockStatus

router = APIRouter(
    prefix="/api/inventory",
    tags=["inventory"],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateInventoryItemRequest,
    owner_id: str = Depends(get_owner_id),
    use_case: CreateInventoryItemUseCase = Depends(get_create_inventory_item_use_case),
) -> InventoryItemResponse:
    """Create an inventory item; opening stock is recorded as a PURCHASE."""
    result = await use_case.execute(owner_id, request)
    return use_case.to_response(result)


@router.get("", response_model=InventoryListResponse)
async def list_items(
    category: InventoryCategory | None = None,
    stock_status: StockStatus | None = Query(default=None, alias="status"),
    low_stock: bool = False,
    owner_id: str = Depends(get_owner_id),
    use_case: ListInventoryUseCase = Depends(get_list_inventory_use_case),
) -> InventoryListResponse:
    """List inventory items with a stock summary."""
    result = await use_case.execute(
        owner_id, category=category, status=stock_status, low_stock=low_stock
    )
    return use_case.to_response(result)


@router.get(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    owner_id: str = Depends(get_owner_id),
    use_case: GetInventoryItemUseCase = Depends(get_get_inventory_item_use_case),
) -> InventoryItemResponse:
    """Get an inventory item with its recent movements."""
    item = await use_case.execute(owner_id, item_id)
    return use_case.to_response(item)


@router.patch(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateInventoryItemRequest,
    owner_id: str = Depends(get_owner_id),
    use_case: UpdateInventoryItemUseCase = Depends(get_update_inventory_item_use_case),
) -> InventoryItemResponse:
    """Update item metadata. Use the movements endpoint to change quantity."""
    item = await use_case.execute(owner_id, item_id, request)
    return use_case.to_response(item)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    owner_id: str = Depends(get_owner_id),
    use_case: DeleteInventoryItemUseCase = Depends(get_delete_inventory_item_use_case),
) -> MessageResponse:
    """Delete an inventory item and its movement history."""
    await use_case.execute(owner_id, item_id)
    return MessageResponse(message="Inventory item deleted")


@router.post(
    "/{item_id}/movements",
    response_model=RecordMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def record_movement(
    item_id: int,
    request: RecordMovementRequest,
    owner_id: str = Depends(get_owner_id),
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> RecordMovementResponse:
    """Record a stock movement. Decreasing movements never drive stock below zero."""
    result = await use_case.execute(owner_id, item_id, request)
    return use_case.to_response(result)


@router.get(
    "/{item_id}/movements",
    response_model=MovementListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_movements(
    item_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    owner_id: str = Depends(get_owner_id),
    use_case: GetInventoryItemUseCase = Depends(get_get_inventory_item_use_case),
) -> MovementListResponse:
    """Get the ledger for an inventory item, newest first."""
    movements = await use_case.list_movements(owner_id, item_id, limit=limit, offset=offset)
    return use_case.movements_to_response(movements, limit=limit, offset=offset)
