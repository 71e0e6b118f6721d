"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from agroledger.core.entities.inventory import (
    InventoryCategory,
    InventoryItem,
    InventoryMovement,
    MovementReference,
    MovementType,
    StockStatus,
)


class IInventoryStore(ABC):
    """
    Interface for inventory item and movement persistence.

    Write methods accept an optional ``conn`` so callers can group several
    writes into one transaction opened with ``transaction()``.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[Any]:
        """Open a write transaction; yields a handle to pass as ``conn``."""
        pass

    @abstractmethod
    async def create_item(self, item: InventoryItem, conn: Any = None) -> InventoryItem:
        """Create a new inventory item."""
        pass

    @abstractmethod
    async def get_item(
        self, owner_id: str, item_id: int, movements_limit: int = 0, conn: Any = None
    ) -> InventoryItem | None:
        """Get an owner's inventory item, optionally with its latest movements."""
        pass

    @abstractmethod
    async def list_items(
        self,
        owner_id: str,
        category: InventoryCategory | None = None,
        status: StockStatus | None = None,
        low_stock: bool = False,
        movements_limit: int = 0,
    ) -> list[InventoryItem]:
        """List an owner's inventory items ordered by name."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem, conn: Any = None) -> InventoryItem:
        """Update item metadata. Never writes quantity."""
        pass

    @abstractmethod
    async def delete_item(self, owner_id: str, item_id: int) -> bool:
        """Delete an item and its movements. Returns False if nothing was deleted."""
        pass

    @abstractmethod
    async def apply_movement(
        self,
        owner_id: str,
        item_id: int,
        movement_type: MovementType,
        quantity: float,
        notes: str | None = None,
        reference: MovementReference | None = None,
        movements_limit: int = 0,
        conn: Any = None,
    ) -> tuple[InventoryItem, InventoryMovement]:
        """
        Atomically change an item's quantity and append the ledger line.

        The returned item carries up to ``movements_limit`` latest movements,
        read inside the same transaction.

        Raises InventoryItemNotFoundError or InsufficientStockError without
        modifying anything.
        """
        pass

    @abstractmethod
    async def add_movement(
        self, movement: InventoryMovement, conn: Any = None
    ) -> InventoryMovement:
        """Append a ledger line without touching the item (initial stock)."""
        pass

    @abstractmethod
    async def get_movements(
        self, owner_id: str, item_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryMovement]:
        """Get movements for an item, newest first."""
        pass
