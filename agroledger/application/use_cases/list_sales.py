"""List Sales Use Case - paginated sales with revenue summary."""

import math
from dataclasses import dataclass

from agroledger.application.dto.converters import sale_to_response
from agroledger.application.dto.responses import (
    SaleListResponse,
    SalePaginationResponse,
    SaleResponse,
    SalesSummaryResponse,
)
from agroledger.core.entities.sale import Sale
from agroledger.core.exceptions import SaleNotFoundError
from agroledger.core.interfaces.sales_store import ISalesStore, SaleFilter


@dataclass
class ListSalesResult:
    """One page of sales plus owner-wide totals."""

    sales: list[Sale]
    page: int
    limit: int
    total: int
    summary: dict[str, float]


class ListSalesUseCase:
    """Read an owner's sales."""

    def __init__(self, sales_store: ISalesStore | None = None):
        self._sales_store = sales_store

    async def _get_sales_store(self) -> ISalesStore:
        if self._sales_store is None:
            from agroledger.infrastructure.storage.sqlite import get_sales_store

            self._sales_store = await get_sales_store()
        return self._sales_store

    async def execute(
        self,
        owner_id: str,
        filters: SaleFilter | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> ListSalesResult:
        """List a page of sales; the summary ignores filters."""
        store = await self._get_sales_store()
        sales = await store.list_sales(
            owner_id, filters=filters, limit=limit, offset=(page - 1) * limit
        )
        total = await store.count_sales(owner_id, filters=filters)
        summary = await store.summarize(owner_id)
        return ListSalesResult(
            sales=sales, page=page, limit=limit, total=total, summary=summary
        )

    async def get(self, owner_id: str, sale_id: int) -> Sale:
        """Get one sale with its lines."""
        store = await self._get_sales_store()
        sale = await store.get_sale(owner_id, sale_id)
        if sale is None:
            raise SaleNotFoundError(sale_id)
        return sale

    def to_response(self, result: ListSalesResult) -> SaleListResponse:
        """Convert result to API response."""
        revenue = result.summary.get("total_revenue", 0.0)
        received = result.summary.get("total_received", 0.0)
        return SaleListResponse(
            sales=[sale_to_response(s) for s in result.sales],
            pagination=SalePaginationResponse(
                page=result.page,
                limit=result.limit,
                total=result.total,
                pages=math.ceil(result.total / result.limit) if result.limit else 0,
            ),
            summary=SalesSummaryResponse(
                total_sales=int(result.summary.get("total_sales", 0)),
                total_revenue=revenue,
                total_received=received,
                pending_amount=revenue - received,
            ),
        )

    @staticmethod
    def sale_to_response(sale: Sale) -> SaleResponse:
        return sale_to_response(sale)
