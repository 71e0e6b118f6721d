"""SQLite implementation of inventory storage."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from agroledger.config import get_logger
from agroledger.core.entities.inventory import (
    InventoryCategory,
    InventoryItem,
    InventoryMovement,
    MovementReference,
    MovementType,
    ReferenceKind,
    StockStatus,
    utcnow,
)
from agroledger.core.exceptions import InsufficientStockError, InventoryItemNotFoundError
from agroledger.core.interfaces.inventory_store import IInventoryStore
from agroledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    join_transaction,
)
from agroledger.infrastructure.storage.sqlite.rows import parse_date, parse_datetime

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory item and movement storage."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Immediate write transaction shared by several store calls."""
        async with get_transaction(immediate=True) as conn:
            yield conn

    async def create_item(
        self, item: InventoryItem, conn: aiosqlite.Connection | None = None
    ) -> InventoryItem:
        """Create a new inventory item."""
        now = utcnow()
        item.created_at = now
        item.updated_at = now
        item.refresh_derived()
        async with join_transaction(conn) as tx:
            cursor = await tx.execute(
                """
                INSERT INTO inventory_items (
                    owner_id, name, category, sku, quantity, unit,
                    min_quantity, max_quantity, unit_cost, total_value, status,
                    supplier_name, location, expiry_date, batch_number, farm_id,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.owner_id,
                    item.name,
                    item.category.value,
                    item.sku,
                    item.quantity,
                    item.unit,
                    item.min_quantity,
                    item.max_quantity,
                    item.unit_cost,
                    item.total_value,
                    item.status.value,
                    item.supplier_name,
                    item.location,
                    item.expiry_date.isoformat() if item.expiry_date else None,
                    item.batch_number,
                    item.farm_id,
                    item.created_at.isoformat(),
                    item.updated_at.isoformat(),
                ),
            )
            item.id = cursor.lastrowid
            logger.info(
                "inventory_item_created",
                item_id=item.id,
                owner_id=item.owner_id,
                category=item.category.value,
                quantity=item.quantity,
            )
            return item

    async def get_item(
        self,
        owner_id: str,
        item_id: int,
        movements_limit: int = 0,
        conn: aiosqlite.Connection | None = None,
    ) -> InventoryItem | None:
        """Get an owner's inventory item by ID."""
        if conn is not None:
            return await self._load_item(conn, owner_id, item_id, movements_limit)
        async with get_connection() as own:
            return await self._load_item(own, owner_id, item_id, movements_limit)

    async def _load_item(
        self, conn: aiosqlite.Connection, owner_id: str, item_id: int, movements_limit: int
    ) -> InventoryItem | None:
        row = await self._fetch_item_row(conn, owner_id, item_id)
        if row is None:
            return None
        item = self._row_to_item(row)
        if movements_limit:
            item.movements = await self._fetch_movements(conn, item_id, movements_limit)
        return item

    async def list_items(
        self,
        owner_id: str,
        category: InventoryCategory | None = None,
        status: StockStatus | None = None,
        low_stock: bool = False,
        movements_limit: int = 0,
    ) -> list[InventoryItem]:
        """List an owner's inventory items with optional filters."""
        query = "SELECT * FROM inventory_items WHERE owner_id = ?"
        params: list = [owner_id]

        if category:
            query += " AND category = ?"
            params.append(category.value)
        if status:
            query += " AND status = ?"
            params.append(status.value)
        if low_stock:
            query += " AND min_quantity > 0 AND quantity <= min_quantity"

        query += " ORDER BY name ASC, id ASC"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            items = [self._row_to_item(row) for row in rows]
            if movements_limit:
                for item in items:
                    item.movements = await self._fetch_movements(
                        conn, item.id, movements_limit
                    )
            return items

    async def update_item(
        self, item: InventoryItem, conn: aiosqlite.Connection | None = None
    ) -> InventoryItem:
        """Update item metadata; quantity is owned by apply_movement."""
        item.updated_at = utcnow()
        async with join_transaction(conn) as tx:
            row = await self._fetch_item_row(tx, item.owner_id, item.id)
            if row is None:
                raise InventoryItemNotFoundError(item.id)

            # Derived fields follow the stored quantity, not the caller's copy
            item.quantity = float(row["quantity"])
            item.refresh_derived()

            await tx.execute(
                """
                UPDATE inventory_items SET
                    name = ?,
                    category = ?,
                    sku = ?,
                    unit = ?,
                    min_quantity = ?,
                    max_quantity = ?,
                    unit_cost = ?,
                    total_value = ?,
                    status = ?,
                    supplier_name = ?,
                    location = ?,
                    expiry_date = ?,
                    batch_number = ?,
                    farm_id = ?,
                    updated_at = ?
                WHERE id = ? AND owner_id = ?
                """,
                (
                    item.name,
                    item.category.value,
                    item.sku,
                    item.unit,
                    item.min_quantity,
                    item.max_quantity,
                    item.unit_cost,
                    item.total_value,
                    item.status.value,
                    item.supplier_name,
                    item.location,
                    item.expiry_date.isoformat() if item.expiry_date else None,
                    item.batch_number,
                    item.farm_id,
                    item.updated_at.isoformat(),
                    item.id,
                    item.owner_id,
                ),
            )
            logger.info("inventory_item_updated", item_id=item.id, status=item.status.value)
            return item

    async def delete_item(self, owner_id: str, item_id: int) -> bool:
        """Delete an item; its movements go with it (ON DELETE CASCADE)."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM inventory_items WHERE id = ? AND owner_id = ?",
                (item_id, owner_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("inventory_item_deleted", item_id=item_id)
            return deleted

    async def apply_movement(
        self,
        owner_id: str,
        item_id: int,
        movement_type: MovementType,
        quantity: float,
        notes: str | None = None,
        reference: MovementReference | None = None,
        movements_limit: int = 0,
        conn: aiosqlite.Connection | None = None,
    ) -> tuple[InventoryItem, InventoryMovement]:
        """
        Change quantity and append the ledger line in one transaction.

        Decreasing movements use a conditional UPDATE so the row is only
        touched when enough stock is on hand; previous and new quantities
        are read inside the same transaction that holds the write lock.
        """
        now = utcnow()
        async with join_transaction(conn) as tx:
            row = await self._fetch_item_row(tx, owner_id, item_id)
            if row is None:
                raise InventoryItemNotFoundError(item_id)
            previous_quantity = float(row["quantity"])

            if movement_type.is_increasing:
                cursor = await tx.execute(
                    """
                    UPDATE inventory_items
                    SET quantity = quantity + ?, updated_at = ?
                    WHERE id = ? AND owner_id = ?
                    """,
                    (quantity, now.isoformat(), item_id, owner_id),
                )
            else:
                cursor = await tx.execute(
                    """
                    UPDATE inventory_items
                    SET quantity = quantity - ?, updated_at = ?
                    WHERE id = ? AND owner_id = ? AND quantity >= ?
                    """,
                    (quantity, now.isoformat(), item_id, owner_id, quantity),
                )
            if cursor.rowcount == 0:
                raise InsufficientStockError(item_id, quantity, previous_quantity)

            item = self._row_to_item(await self._fetch_item_row(tx, owner_id, item_id))
            await tx.execute(
                "UPDATE inventory_items SET status = ?, total_value = ? WHERE id = ?",
                (item.status.value, item.total_value, item_id),
            )

            movement = InventoryMovement(
                inventory_item_id=item_id,
                owner_id=owner_id,
                movement_type=movement_type,
                quantity=quantity,
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
                notes=notes,
                reference=reference,
                created_at=now,
            )
            await self.add_movement(movement, conn=tx)

            if movements_limit:
                item.movements = await self._fetch_movements(tx, item_id, movements_limit)
            return item, movement

    async def add_movement(
        self, movement: InventoryMovement, conn: aiosqlite.Connection | None = None
    ) -> InventoryMovement:
        """Append a ledger line."""
        async with join_transaction(conn) as tx:
            cursor = await tx.execute(
                """
                INSERT INTO inventory_movements (
                    inventory_item_id, owner_id, movement_type, quantity,
                    previous_quantity, new_quantity, reference_type,
                    reference_id, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    movement.inventory_item_id,
                    movement.owner_id,
                    movement.movement_type.value,
                    movement.quantity,
                    movement.previous_quantity,
                    movement.new_quantity,
                    movement.reference.kind.value if movement.reference else None,
                    movement.reference.id if movement.reference else None,
                    movement.notes,
                    movement.created_at.isoformat(),
                ),
            )
            movement.id = cursor.lastrowid
            return movement

    async def get_movements(
        self, owner_id: str, item_id: int, limit: int = 100, offset: int = 0
    ) -> list[InventoryMovement]:
        """Get movements for an owner's item, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_movements
                WHERE inventory_item_id = ? AND owner_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (item_id, owner_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    async def _fetch_item_row(
        conn: aiosqlite.Connection, owner_id: str, item_id: int
    ) -> aiosqlite.Row | None:
        cursor = await conn.execute(
            "SELECT * FROM inventory_items WHERE id = ? AND owner_id = ?",
            (item_id, owner_id),
        )
        return await cursor.fetchone()

    async def _fetch_movements(
        self, conn: aiosqlite.Connection, item_id: int, limit: int
    ) -> list[InventoryMovement]:
        cursor = await conn.execute(
            """
            SELECT * FROM inventory_movements
            WHERE inventory_item_id = ?
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            (item_id, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_movement(row) for row in rows]

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> InventoryItem:
        """Convert a database row to an InventoryItem entity."""
        # status and total_value are recomputed by the entity validator
        return InventoryItem(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            category=InventoryCategory(row["category"]),
            sku=row["sku"],
            quantity=float(row["quantity"]),
            unit=row["unit"],
            min_quantity=row["min_quantity"],
            max_quantity=row["max_quantity"],
            unit_cost=row["unit_cost"],
            supplier_name=row["supplier_name"],
            location=row["location"],
            expiry_date=parse_date(row["expiry_date"]),
            batch_number=row["batch_number"],
            farm_id=row["farm_id"],
            created_at=parse_datetime(row["created_at"]) or utcnow(),
            updated_at=parse_datetime(row["updated_at"]) or utcnow(),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> InventoryMovement:
        """Convert a database row to an InventoryMovement entity."""
        reference = None
        if row["reference_type"]:
            reference = MovementReference(
                kind=ReferenceKind(row["reference_type"]),
                id=row["reference_id"] or "",
            )

        return InventoryMovement(
            id=row["id"],
            inventory_item_id=row["inventory_item_id"],
            owner_id=row["owner_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=float(row["quantity"]),
            previous_quantity=float(row["previous_quantity"]),
            new_quantity=float(row["new_quantity"]),
            notes=row["notes"],
            reference=reference,
            created_at=parse_datetime(row["created_at"]) or utcnow(),
        )
