"""Get Inventory Item Use Case - item detail and its ledger."""

from agroledger.application.dto.converters import item_to_response, movement_to_response
from agroledger.application.dto.responses import InventoryItemResponse, MovementListResponse
from agroledger.config import get_settings
from agroledger.core.entities.inventory import InventoryItem, InventoryMovement
from agroledger.core.exceptions import InventoryItemNotFoundError
from agroledger.core.interfaces.inventory_store import IInventoryStore


class GetInventoryItemUseCase:
    """Read one of an owner's items, or page through its movements."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, owner_id: str, item_id: int) -> InventoryItem:
        """Get the item with its recent movements."""
        store = await self._get_inventory_store()
        item = await store.get_item(
            owner_id,
            item_id,
            movements_limit=get_settings().inventory.detail_movements_limit,
        )
        if item is None:
            raise InventoryItemNotFoundError(item_id)
        return item

    async def list_movements(
        self, owner_id: str, item_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryMovement]:
        """Ledger lines for an item, newest first."""
        store = await self._get_inventory_store()
        if await store.get_item(owner_id, item_id) is None:
            raise InventoryItemNotFoundError(item_id)
        return await store.get_movements(owner_id, item_id, limit=limit, offset=offset)

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        """Convert result to API response."""
        return item_to_response(item)

    @staticmethod
    def movements_to_response(
        movements: list[InventoryMovement], limit: int, offset: int
    ) -> MovementListResponse:
        return MovementListResponse(
            movements=[movement_to_response(m) for m in movements],
            limit=limit,
            offset=offset,
        )
