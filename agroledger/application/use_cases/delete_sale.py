"""Delete Sale Use Case - puts sold stock back before removing the sale."""

from dataclasses import dataclass

from agroledger.config import get_logger, get_settings
from agroledger.core.entities.sale import Sale
from agroledger.core.exceptions import InventoryItemNotFoundError, SaleNotFoundError
from agroledger.core.interfaces.inventory_store import IInventoryStore
from agroledger.core.interfaces.sales_store import ISalesStore
from agroledger.core.services.inventory_ledger import InventoryLedger, MovementResult

logger = get_logger(__name__)


@dataclass
class DeleteSaleResult:
    """Result of deleting a sale."""

    sale: Sale
    restored: list[MovementResult]
    skipped_item_ids: list[int]


class DeleteSaleUseCase:
    """Delete a sale, recording a RETURN for each stock-linked line."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        sales_store: ISalesStore | None = None,
        ledger: InventoryLedger | None = None,
    ):
        self._inventory_store = inventory_store
        self._sales_store = sales_store
        self._ledger = ledger

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_sales_store(self) -> ISalesStore:
        if self._sales_store is None:
            from agroledger.infrastructure.storage.sqlite import get_sales_store

            self._sales_store = await get_sales_store()
        return self._sales_store

    async def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            self._ledger = InventoryLedger(
                await self._get_inventory_store(),
                recent_movements_limit=get_settings().inventory.recent_movements_limit,
            )
        return self._ledger

    async def execute(self, owner_id: str, sale_id: int) -> DeleteSaleResult:
        """Execute delete sale use case."""
        inv_store = await self._get_inventory_store()
        sales_store = await self._get_sales_store()
        ledger = await self._get_ledger()

        restored: list[MovementResult] = []
        skipped: list[int] = []

        async with inv_store.transaction() as conn:
            sale = await sales_store.get_sale(owner_id, sale_id, conn=conn)
            if sale is None:
                raise SaleNotFoundError(sale_id)

            for line in sale.stock_lines:
                item_id: int = line.inventory_item_id  # type: ignore[assignment]
                try:
                    restored.append(
                        await ledger.restore_for_sale_deletion(
                            owner_id,
                            item_id,
                            line.quantity,
                            sale_id=sale_id,
                            sale_number=sale.sale_number,
                            conn=conn,
                        )
                    )
                except InventoryItemNotFoundError:
                    # Item removed since the sale; nothing to put back
                    logger.warning(
                        "sale_restore_skipped",
                        sale_id=sale_id,
                        item_id=item_id,
                        quantity=line.quantity,
                    )
                    skipped.append(item_id)

            await sales_store.delete_sale(owner_id, sale_id, conn=conn)

        logger.info(
            "delete_sale_complete",
            sale_id=sale_id,
            sale_number=sale.sale_number,
            restored=len(restored),
            skipped=len(skipped),
        )
        return DeleteSaleResult(sale=sale, restored=restored, skipped_item_ids=skipped)
