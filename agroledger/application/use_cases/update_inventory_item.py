"""Update Inventory Item Use Case - metadata only."""

from agroledger.application.dto.converters import item_to_response
from agroledger.application.dto.requests import UpdateInventoryItemRequest
from agroledger.application.dto.responses import InventoryItemResponse
from agroledger.config import get_logger
from agroledger.core.entities.inventory import InventoryItem
from agroledger.core.exceptions import InventoryItemNotFoundError
from agroledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)

# Fields that cannot be cleared
_REQUIRED_FIELDS = {"name", "category"}


class UpdateInventoryItemUseCase:
    """
    Update an item's descriptive fields.

    Quantity is never written here; total_value and status are re-derived
    from the stored quantity when unit_cost or min_quantity change.
    """

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self, owner_id: str, item_id: int, request: UpdateInventoryItemRequest
    ) -> InventoryItem:
        """Execute update inventory item use case."""
        store = await self._get_inventory_store()

        item = await store.get_item(owner_id, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field not in _REQUIRED_FIELDS
        }
        if not changes:
            return item

        item = item.model_copy(update=changes)
        item = await store.update_item(item)

        logger.info(
            "inventory_item_metadata_updated",
            item_id=item_id,
            fields=sorted(changes),
            status=item.status.value,
        )
        return item

    def to_response(self, item: InventoryItem) -> InventoryItemResponse:
        """Convert result to API response."""
        return item_to_response(item)
