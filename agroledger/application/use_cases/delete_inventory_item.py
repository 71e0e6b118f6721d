"""Delete Inventory Item Use Case."""

from agroledger.config import get_logger
from agroledger.core.exceptions import InventoryItemNotFoundError
from agroledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class DeleteInventoryItemUseCase:
    """Hard-delete an item together with its ledger lines."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, owner_id: str, item_id: int) -> None:
        """Execute delete inventory item use case."""
        store = await self._get_inventory_store()
        if not await store.delete_item(owner_id, item_id):
            raise InventoryItemNotFoundError(item_id)
