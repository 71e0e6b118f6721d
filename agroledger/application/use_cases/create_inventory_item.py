"""Create Inventory Item Use Case - opening stock goes on the ledger."""

from dataclasses import dataclass

from agroledger.application.dto.converters import item_to_response
from agroledger.application.dto.requests import CreateInventoryItemRequest
from agroledger.application.dto.responses import InventoryItemResponse
from agroledger.config import get_logger
from agroledger.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
)
from agroledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)

INITIAL_STOCK_NOTE = "Initial stock"


@dataclass
class CreateInventoryItemResult:
    """Result of creating an inventory item."""

    item: InventoryItem
    initial_movement: InventoryMovement | None = None


class CreateInventoryItemUseCase:
    """Create an item and record its opening quantity as a PURCHASE."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self, owner_id: str, request: CreateInventoryItemRequest
    ) -> CreateInventoryItemResult:
        """Execute create inventory item use case."""
        store = await self._get_inventory_store()

        item = InventoryItem(owner_id=owner_id, **request.model_dump())
        movement = None

        async with store.transaction() as conn:
            item = await store.create_item(item, conn=conn)

            if item.quantity > 0:
                movement = await store.add_movement(
                    InventoryMovement(
                        inventory_item_id=item.id,  # type: ignore[arg-type]
                        owner_id=owner_id,
                        movement_type=MovementType.PURCHASE,
                        quantity=item.quantity,
                        previous_quantity=0.0,
                        new_quantity=item.quantity,
                        notes=INITIAL_STOCK_NOTE,
                    ),
                    conn=conn,
                )
                item.movements = [movement]

        logger.info(
            "create_inventory_item_complete",
            item_id=item.id,
            status=item.status.value,
            opening_quantity=item.quantity,
        )
        return CreateInventoryItemResult(item=item, initial_movement=movement)

    def to_response(self, result: CreateInventoryItemResult) -> InventoryItemResponse:
        """Convert result to API response."""
        return item_to_response(result.item)
