"""
Inventory ledger service.

Every change to an item's on-hand quantity goes through record_movement:
the quantity update, the derived status/total_value refresh and the
append-only movement line are committed together by the store, or not at all.
"""

import math
from dataclasses import dataclass
from typing import Any

from agroledger.config import get_logger
from agroledger.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementReference,
    MovementType,
    ReferenceKind,
)
from agroledger.core.exceptions import InsufficientStockError, ValidationError
from agroledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


@dataclass
class MovementResult:
    """Outcome of a recorded movement."""

    item: InventoryItem
    movement: InventoryMovement


def parse_movement_type(value: MovementType | str) -> MovementType:
    """Coerce a movement type, rejecting anything outside the eight kinds."""
    if isinstance(value, MovementType):
        return value
    try:
        return MovementType(value)
    except ValueError:
        raise ValidationError(
            "movement_type",
            f"must be one of {', '.join(m.value for m in MovementType)}",
            value,
        ) from None


def validate_quantity(quantity: float) -> float:
    """Movement quantities are positive, finite magnitudes."""
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise ValidationError("quantity", "must be a number", quantity)
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError("quantity", "must be a positive number", quantity)
    return float(quantity)


class InventoryLedger:
    """
    Records stock movements against inventory items.

    Pure service -- the inventory store is injected via constructor and is
    responsible for applying each movement atomically.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        recent_movements_limit: int = 10,
    ) -> None:
        self._store = inventory_store
        self._recent_movements_limit = recent_movements_limit

    async def record_movement(
        self,
        owner_id: str,
        item_id: int,
        movement_type: MovementType | str,
        quantity: float,
        notes: str | None = None,
        reference: MovementReference | None = None,
        conn: Any = None,
    ) -> MovementResult:
        """
        Apply one movement to an owner's item.

        Args:
            owner_id: Tenant that must own the item.
            item_id: Inventory item to move.
            movement_type: One of the eight movement kinds; its direction is fixed.
            quantity: Positive magnitude of the movement.
            notes: Free text kept on the ledger line.
            reference: What caused the movement (sale, deleted sale, ...).
            conn: Enclosing transaction to join, if any.

        Returns:
            MovementResult with the updated item (and its latest movements)
            and the new ledger line.

        Raises:
            ValidationError: bad movement type or quantity; nothing is touched.
            InventoryItemNotFoundError: item missing or owned by someone else.
            InsufficientStockError: a decreasing movement exceeds stock on hand.
        """
        kind = parse_movement_type(movement_type)
        amount = validate_quantity(quantity)

        try:
            item, movement = await self._store.apply_movement(
                owner_id,
                item_id,
                kind,
                amount,
                notes=notes,
                reference=reference,
                movements_limit=self._recent_movements_limit,
                conn=conn,
            )
        except InsufficientStockError as e:
            logger.warning(
                "insufficient_stock",
                item_id=item_id,
                movement_type=kind.value,
                requested=e.details.get("requested"),
                available=e.details.get("available"),
            )
            raise

        logger.info(
            "inventory_movement_recorded",
            item_id=item_id,
            movement_id=movement.id,
            movement_type=kind.value,
            quantity=amount,
            previous_quantity=movement.previous_quantity,
            new_quantity=movement.new_quantity,
            status=item.status.value,
        )
        return MovementResult(item=item, movement=movement)

    async def adjust_for_sale_fulfillment(
        self,
        owner_id: str,
        item_id: int,
        quantity_sold: float,
        sale_id: int,
        sale_number: str | None = None,
        conn: Any = None,
    ) -> MovementResult:
        """Deduct sold stock. Rejects the sale line if stock is short."""
        return await self.record_movement(
            owner_id,
            item_id,
            MovementType.SALE,
            quantity_sold,
            notes=f"Sold in {sale_number or sale_id}",
            reference=MovementReference(kind=ReferenceKind.SALE, id=str(sale_id)),
            conn=conn,
        )

    async def restore_for_sale_deletion(
        self,
        owner_id: str,
        item_id: int,
        quantity_to_restore: float,
        sale_id: int,
        sale_number: str | None = None,
        conn: Any = None,
    ) -> MovementResult:
        """Put stock from a deleted sale back on hand."""
        return await self.record_movement(
            owner_id,
            item_id,
            MovementType.RETURN,
            quantity_to_restore,
            notes=f"Restored from deleted sale {sale_number or sale_id}",
            reference=MovementReference(kind=ReferenceKind.SALE_DELETED, id=str(sale_id)),
            conn=conn,
        )
