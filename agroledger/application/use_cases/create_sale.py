"""Create Sale Use Case - records the sale and deducts linked stock atomically."""

from dataclasses import dataclass
from datetime import date

from agroledger.application.dto.converters import sale_to_response
from agroledger.application.dto.requests import CreateSaleRequest
from agroledger.application.dto.responses import SaleResponse
from agroledger.config import get_logger, get_settings
from agroledger.core.entities.sale import Sale, SaleItem
from agroledger.core.exceptions import InventoryItemNotFoundError
from agroledger.core.interfaces.inventory_store import IInventoryStore
from agroledger.core.interfaces.sales_store import ISalesStore
from agroledger.core.services.inventory_ledger import InventoryLedger, MovementResult

logger = get_logger(__name__)


def format_sale_number(prefix: str, sale_date: date, sequence: int) -> str:
    """SL2610-0001: prefix, two-digit year and month, per-owner sequence."""
    return f"{prefix}{sale_date:%y%m}-{sequence:04d}"


@dataclass
class CreateSaleResult:
    """Result of creating a sale."""

    sale: Sale
    movements: list[MovementResult]


class CreateSaleUseCase:
    """
    Create a sale and fulfil its stock-linked lines.

    The sale, its lines and every SALE movement share one transaction: a line
    whose item is missing or short on stock rejects the whole sale.
    """

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

    async def execute(self, owner_id: str, request: CreateSaleRequest) -> CreateSaleResult:
        """Execute create sale use case."""
        logger.info("create_sale_started", items=len(request.items))

        inv_store = await self._get_inventory_store()
        sales_store = await self._get_sales_store()
        ledger = await self._get_ledger()

        # model_validator computes line and sale totals
        sale = Sale(
            owner_id=owner_id,
            sale_date=request.sale_date or date.today(),
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            customer_email=request.customer_email or None,
            customer_address=request.customer_address,
            discount=request.discount,
            tax=request.tax,
            payment_method=request.payment_method,
            payment_status=request.payment_status,
            paid_amount=request.paid_amount,
            notes=request.notes,
            items=[SaleItem(**line.model_dump()) for line in request.items],
        )
        sale.settle_payment_status()

        movements: list[MovementResult] = []
        async with inv_store.transaction() as conn:
            # Linked items must resolve for this owner before any line is written
            linked: set[int] = {line.inventory_item_id for line in sale.stock_lines}  # type: ignore[misc]
            for item_id in sorted(linked):
                if await inv_store.get_item(owner_id, item_id, conn=conn) is None:
                    raise InventoryItemNotFoundError(item_id)

            sequence = await sales_store.last_sale_sequence(owner_id, conn=conn) + 1
            sale.sale_number = format_sale_number(
                get_settings().inventory.sale_number_prefix, sale.sale_date, sequence
            )
            sale = await sales_store.create_sale(sale, conn=conn)

            for line in sale.stock_lines:
                movements.append(
                    await ledger.adjust_for_sale_fulfillment(
                        owner_id,
                        line.inventory_item_id,  # type: ignore[arg-type]
                        line.quantity,
                        sale_id=sale.id,  # type: ignore[arg-type]
                        sale_number=sale.sale_number,
                        conn=conn,
                    )
                )

        logger.info(
            "create_sale_complete",
            sale_id=sale.id,
            sale_number=sale.sale_number,
            total=sale.total_amount,
            payment_status=sale.payment_status.value,
            stock_movements=len(movements),
        )
        return CreateSaleResult(sale=sale, movements=movements)

    def to_response(self, result: CreateSaleResult) -> SaleResponse:
        """Convert result to API response."""
        return sale_to_response(result.sale)
