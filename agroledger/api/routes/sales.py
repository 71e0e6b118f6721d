"""Sales endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from agroledger.api.dependencies import (
    get_create_sale_use_case,
    get_delete_sale_use_case,
    get_list_sales_use_case,
    get_owner_id,
    get_update_sale_use_case,
)
from agroledger.application.dto.requests import CreateSaleRequest, UpdateSaleRequest
from agroledger.application.dto.responses import (
    ErrorResponse,
    MessageResponse,
    SaleListResponse,
    SaleResponse,
)
from agroledger.application.use_cases import (
    CreateSaleUseCase,
    DeleteSaleUseCase,
    ListSalesUseCase,
    UpdateSaleUseCase,
)
from agroledger.core.entities.sale import PaymentStatus
from agroledger.core.interfaces.sales_store import SaleFilter

router = APIRouter(
    prefix="/api/sales",
    tags=["sales"],
    responses={401: {"model": ErrorResponse}},
)


@router.post(
    "",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def create_sale(
    request: CreateSaleRequest,
    owner_id: str = Depends(get_owner_id),
    use_case: CreateSaleUseCase = Depends(get_create_sale_use_case),
) -> SaleResponse:
    """Record a sale and deduct stock for lines linked to inventory."""
    result = await use_case.execute(owner_id, request)
    return use_case.to_response(result)


@router.get("", response_model=SaleListResponse)
async def list_sales(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    payment_status: PaymentStatus | None = Query(default=None, alias="status"),
    start_date: date | None = None,
    end_date: date | None = None,
    search: str | None = None,
    owner_id: str = Depends(get_owner_id),
    use_case: ListSalesUseCase = Depends(get_list_sales_use_case),
) -> SaleListResponse:
    """List sales with pagination and revenue summary."""
    filters = SaleFilter(
        payment_status=payment_status,
        start_date=start_date,
        end_date=end_date,
        search=search or None,
    )
    result = await use_case.execute(owner_id, filters=filters, page=page, limit=limit)
    return use_case.to_response(result)


@router.get(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_sale(
    sale_id: int,
    owner_id: str = Depends(get_owner_id),
    use_case: ListSalesUseCase = Depends(get_list_sales_use_case),
) -> SaleResponse:
    """Get a sale with its lines."""
    sale = await use_case.get(owner_id, sale_id)
    return use_case.sale_to_response(sale)


@router.patch(
    "/{sale_id}",
    response_model=SaleResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_sale(
    sale_id: int,
    request: UpdateSaleRequest,
    owner_id: str = Depends(get_owner_id),
    use_case: UpdateSaleUseCase = Depends(get_update_sale_use_case),
) -> SaleResponse:
    """Record a payment or edit customer details. Stock is not affected."""
    sale = await use_case.execute(owner_id, sale_id, request)
    return use_case.to_response(sale)


@router.delete(
    "/{sale_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_sale(
    sale_id: int,
    owner_id: str = Depends(get_owner_id),
    use_case: DeleteSaleUseCase = Depends(get_delete_sale_use_case),
) -> MessageResponse:
    """Delete a sale, returning its stock to inventory."""
    await use_case.execute(owner_id, sale_id)
    return MessageResponse(message="Sale deleted successfully")
