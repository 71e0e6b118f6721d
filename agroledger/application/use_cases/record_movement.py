"""Record Movement Use Case - any of the eight movement kinds against one item."""

from agroledger.application.dto.converters import item_to_response, movement_to_response
from agroledger.application.dto.requests import RecordMovementRequest
from agroledger.application.dto.responses import RecordMovementResponse
from agroledger.config import get_logger, get_settings
from agroledger.core.entities.inventory import MovementReference
from agroledger.core.exceptions import ValidationError
from agroledger.core.interfaces.inventory_store import IInventoryStore
from agroledger.core.services.inventory_ledger import InventoryLedger, MovementResult

logger = get_logger(__name__)


def build_reference(request: RecordMovementRequest) -> MovementReference | None:
    """Pair reference_type and reference_id; one without the other is rejected."""
    if request.reference_type is None and request.reference_id is None:
        return None
    if request.reference_type is None:
        raise ValidationError("reference_type", "required when reference_id is set")
    if not request.reference_id:
        raise ValidationError("reference_id", "required when reference_type is set")
    return MovementReference(kind=request.reference_type, id=request.reference_id)


class RecordMovementUseCase:
    """Apply a stock movement through the inventory ledger."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        ledger: InventoryLedger | None = None,
    ):
        self._inventory_store = inventory_store
        self._ledger = ledger

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from agroledger.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            self._ledger = InventoryLedger(
                await self._get_inventory_store(),
                recent_movements_limit=get_settings().inventory.recent_movements_limit,
            )
        return self._ledger

    async def execute(
        self, owner_id: str, item_id: int, request: RecordMovementRequest
    ) -> MovementResult:
        """Execute record movement use case."""
        logger.info(
            "record_movement_started",
            item_id=item_id,
            movement_type=request.movement_type,
            quantity=request.quantity,
        )

        reference = build_reference(request)
        ledger = await self._get_ledger()
        return await ledger.record_movement(
            owner_id,
            item_id,
            request.movement_type,
            request.quantity,
            notes=request.notes,
            reference=reference,
        )

    def to_response(self, result: MovementResult) -> RecordMovementResponse:
        """Convert result to API response."""
        return RecordMovementResponse(
            item=item_to_response(result.item),
            movement=movement_to_response(result.movement),
        )
