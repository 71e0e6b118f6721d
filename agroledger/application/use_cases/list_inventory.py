"""List Inventory Use Case - filtered items with stock summary."""

from collections import Counter
from dataclasses import dataclass, field

from agroledger.application.dto.converters import item_to_response
from agroledger.application.dto.responses import (
    InventoryListResponse,
    InventorySummaryResponse,
)
from agroledger.config import get_settings
from agroledger.core.entities.inventory import InventoryCategory, InventoryItem, StockStatus
from agroledger.core.interfaces.inventory_store import IInventoryStore


@dataclass
class InventorySummary:
    """Aggregates over a list of items."""

    total_items: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    out_of_stock_count: int = 0
    by_category: dict[str, int] = field(default_factory=dict)

    @classmethod
    def of(cls, items: list[InventoryItem]) -> "InventorySummary":
        return cls(
            total_items=len(items),
            total_value=sum(i.total_value or 0.0 for i in items),
            low_stock_count=sum(1 for i in items if i.is_low_stock),
            out_of_stock_count=sum(1 for i in items if i.status == StockStatus.OUT_OF_STOCK),
            by_category=dict(Counter(i.category.value for i in items)),
        )


@dataclass
class ListInventoryResult:
    """Result of listing inventory."""

    items: list[InventoryItem]
    summary: InventorySummary


class ListInventoryUseCase:
    """List an owner's items, each with its latest movements."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self,
        owner_id: str,
        category: InventoryCategory | None = None,
        status: StockStatus | None = None,
        low_stock: bool = False,
    ) -> ListInventoryResult:
        """Execute list inventory use case."""
        store = await self._get_inventory_store()
        items = await store.list_items(
            owner_id,
            category=category,
            status=status,
            low_stock=low_stock,
            movements_limit=get_settings().inventory.list_movements_limit,
        )
        return ListInventoryResult(items=items, summary=InventorySummary.of(items))

    def to_response(self, result: ListInventoryResult) -> InventoryListResponse:
        """Convert result to API response."""
        s = result.summary
        return InventoryListResponse(
            items=[item_to_response(i) for i in result.items],
            summary=InventorySummaryResponse(
                total_items=s.total_items,
                total_value=s.total_value,
                low_stock_count=s.low_stock_count,
                out_of_stock_count=s.out_of_stock_count,
                by_category=s.by_category,
            ),
        )
