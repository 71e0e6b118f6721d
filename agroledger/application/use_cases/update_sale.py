"""Update Sale Use Case - later payments and customer details."""

from agroledger.application.dto.converters import sale_to_response
from agroledger.application.dto.requests import UpdateSaleRequest
from agroledger.application.dto.responses import SaleResponse
from agroledger.config import get_logger
from agroledger.core.entities.sale import Sale
from agroledger.core.exceptions import SaleNotFoundError
from agroledger.core.interfaces.sales_store import ISalesStore

logger = get_logger(__name__)

# Fields that cannot be cleared
_REQUIRED_FIELDS = {"payment_status", "paid_amount"}


class UpdateSaleUseCase:
    """
    Update a sale's customer and payment fields.

    Payment status is settled again from paid_amount against the stored
    total. Lines and stock are never touched.
    """

    def __init__(self, sales_store: ISalesStore | None = None):
        self._sales_store = sales_store

    async def _get_sales_store(self) -> ISalesStore:
        if self._sales_store is None:
            from agroledger.infrastructure.storage.sqlite import get_sales_store

            self._sales_store = await get_sales_store()
        return self._sales_store

    async def execute(self, owner_id: str, sale_id: int, request: UpdateSaleRequest) -> Sale:
        """Execute update sale use case."""
        store = await self._get_sales_store()

        sale = await store.get_sale(owner_id, sale_id)
        if sale is None:
            raise SaleNotFoundError(sale_id)

        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field not in _REQUIRED_FIELDS
        }
        if "customer_email" in changes:
            changes["customer_email"] = changes["customer_email"] or None
        if not changes:
            return sale

        previous_status = sale.payment_status
        sale = sale.model_copy(update=changes)
        sale.settle_payment_status()
        sale = await store.update_sale(sale)

        logger.info(
            "sale_payment_updated",
            sale_id=sale_id,
            fields=sorted(changes),
            previous_status=previous_status.value,
            payment_status=sale.payment_status.value,
            paid_amount=sale.paid_amount,
        )
        return sale

    def to_response(self, sale: Sale) -> SaleResponse:
        """Convert result to API response."""
        return sale_to_response(sale)
