"""Entity to response DTO conversion shared by use cases."""

from agroledger.application.dto.responses import (
    InventoryItemResponse,
    InventoryMovementResponse,
    SaleItemResponse,
    SaleResponse,
)
from agroledger.core.entities.inventory import InventoryItem, InventoryMovement
from agroledger.core.entities.sale import Sale


def movement_to_response(movement: InventoryMovement) -> InventoryMovementResponse:
    """Convert a ledger line."""
    return InventoryMovementResponse(
        id=movement.id,  # type: ignore[arg-type]
        inventory_item_id=movement.inventory_item_id,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        previous_quantity=movement.previous_quantity,
        new_quantity=movement.new_quantity,
        notes=movement.notes,
        reference_type=movement.reference.kind.value if movement.reference else None,
        reference_id=movement.reference.id if movement.reference else None,
        created_at=movement.created_at,
    )


def item_to_response(item: InventoryItem) -> InventoryItemResponse:
    """Convert an inventory item with whatever movements it carries."""
    return InventoryItemResponse(
        id=item.id,  # type: ignore[arg-type]
        name=item.name,
        category=item.category.value,
        sku=item.sku,
        quantity=item.quantity,
        unit=item.unit,
        min_quantity=item.min_quantity,
        max_quantity=item.max_quantity,
        unit_cost=item.unit_cost,
        total_value=item.total_value,
        status=item.status.value,
        supplier_name=item.supplier_name,
        location=item.location,
        expiry_date=item.expiry_date,
        batch_number=item.batch_number,
        farm_id=item.farm_id,
        movements=[movement_to_response(m) for m in item.movements],
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def sale_to_response(sale: Sale) -> SaleResponse:
    """Convert a sale and its lines."""
    return SaleResponse(
        id=sale.id,  # type: ignore[arg-type]
        sale_number=sale.sale_number,
        sale_date=sale.sale_date,
        customer_name=sale.customer_name,
        customer_phone=sale.customer_phone,
        customer_email=sale.customer_email,
        customer_address=sale.customer_address,
        subtotal=sale.subtotal,
        discount=sale.discount,
        tax=sale.tax,
        total_amount=sale.total_amount,
        payment_method=sale.payment_method.value if sale.payment_method else None,
        payment_status=sale.payment_status.value,
        paid_amount=sale.paid_amount,
        paid_at=sale.paid_at,
        notes=sale.notes,
        items=[
            SaleItemResponse(
                id=line.id,  # type: ignore[arg-type]
                product_type=line.product_type.value,
                product_name=line.product_name,
                quantity=line.quantity,
                unit=line.unit,
                unit_price=line.unit_price,
                total_price=line.total_price,
                inventory_item_id=line.inventory_item_id,
            )
            for line in sale.items
        ],
        created_at=sale.created_at,
    )
