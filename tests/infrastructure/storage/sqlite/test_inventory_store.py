"""Tests for SQLite inventory store."""

import asyncio

import aiosqlite
import pytest

from agroledger.core.entities.inventory import (
    InventoryCategory,
    MovementReference,
    MovementType,
    ReferenceKind,
    StockStatus,
)
from agroledger.core.exceptions import InsufficientStockError, InventoryItemNotFoundError
from agroledger.infrastructure.storage.sqlite.connection import get_connection


class TestSQLiteInventoryStore:
    """Tests for SQLiteInventoryStore CRUD."""

    async def test_create_and_get(self, inventory_store, new_item):
        created = await inventory_store.create_item(new_item())
        assert created.id is not None

        fetched = await inventory_store.get_item("owner-1", created.id)
        assert fetched.name == "Maize seed"
        assert fetched.quantity == 10
        assert fetched.status == StockStatus.IN_STOCK
        assert fetched.total_value == 20.0

    async def test_get_other_owner(self, inventory_store, new_item):
        created = await inventory_store.create_item(new_item())
        assert await inventory_store.get_item("owner-2", created.id) is None

    async def test_list_filters(self, inventory_store, new_item):
        await inventory_store.create_item(new_item(name="Urea", category=InventoryCategory.FERTILIZERS))
        await inventory_store.create_item(new_item(name="Beans", quantity=3))
        await inventory_store.create_item(new_item(name="Diesel", category=InventoryCategory.FUEL, quantity=0))
        await inventory_store.create_item(new_item(owner_id="owner-2", name="Foreign"))

        names = [i.name for i in await inventory_store.list_items("owner-1")]
        assert names == ["Beans", "Diesel", "Urea"]

        seeds = await inventory_store.list_items("owner-1", category=InventoryCategory.SEEDS)
        assert [i.name for i in seeds] == ["Beans"]

        out = await inventory_store.list_items("owner-1", status=StockStatus.OUT_OF_STOCK)
        assert [i.name for i in out] == ["Diesel"]

        low = await inventory_store.list_items("owner-1", low_stock=True)
        assert {i.name for i in low} == {"Beans", "Diesel"}

    async def test_zero_threshold_not_low_stock(self, inventory_store, new_item):
        await inventory_store.create_item(new_item(name="Twine", quantity=0, min_quantity=0))
        await inventory_store.create_item(new_item(name="Beans", quantity=3))

        low = await inventory_store.list_items("owner-1", low_stock=True)
        assert [i.name for i in low] == ["Beans"]

    async def test_update_metadata_keeps_quantity(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=10))
        item.quantity = 999
        item.min_quantity = 12
        item.location = "Store room"

        updated = await inventory_store.update_item(item)

        assert updated.quantity == 10
        assert updated.status == StockStatus.LOW_STOCK
        fetched = await inventory_store.get_item("owner-1", item.id)
        assert fetched.quantity == 10
        assert fetched.location == "Store room"

    async def test_update_other_owner(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item())
        item.owner_id = "owner-2"
        with pytest.raises(InventoryItemNotFoundError):
            await inventory_store.update_item(item)

    async def test_delete_cascades_movements(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item())
        await inventory_store.apply_movement("owner-1", item.id, MovementType.USAGE, 2)

        assert await inventory_store.delete_item("owner-1", item.id) is True
        assert await inventory_store.delete_item("owner-1", item.id) is False

        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM inventory_movements WHERE inventory_item_id = ?",
                (item.id,),
            )
            assert (await cursor.fetchone())[0] == 0

    async def test_delete_other_owner(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item())
        assert await inventory_store.delete_item("owner-2", item.id) is False
        assert await inventory_store.get_item("owner-1", item.id) is not None


class TestApplyMovement:
    """Stock movements against a persisted item."""

    async def test_purchase(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=10, min_quantity=5, unit_cost=2))

        updated, movement = await inventory_store.apply_movement(
            "owner-1", item.id, MovementType.PURCHASE, 5
        )

        assert updated.quantity == 15
        assert updated.status == StockStatus.IN_STOCK
        assert updated.total_value == 30.0
        assert movement.previous_quantity == 10
        assert movement.new_quantity == 15

    async def test_usage_to_low_stock(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=15, min_quantity=5, unit_cost=2))

        updated, movement = await inventory_store.apply_movement(
            "owner-1", item.id, MovementType.USAGE, 11
        )

        assert updated.quantity == 4
        assert updated.status == StockStatus.LOW_STOCK
        assert updated.total_value == 8.0
        assert (movement.previous_quantity, movement.new_quantity) == (15, 4)

    async def test_sale_to_zero(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=4, min_quantity=5))

        updated, _ = await inventory_store.apply_movement("owner-1", item.id, MovementType.SALE, 4)

        assert updated.quantity == 0
        assert updated.status == StockStatus.OUT_OF_STOCK

    async def test_overdraw_rejected_and_nothing_written(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=0))

        with pytest.raises(InsufficientStockError) as exc_info:
            await inventory_store.apply_movement("owner-1", item.id, MovementType.USAGE, 1)
        assert exc_info.value.details["available"] == 0

        fetched = await inventory_store.get_item("owner-1", item.id)
        assert fetched.quantity == 0
        assert fetched.status == StockStatus.OUT_OF_STOCK
        assert await inventory_store.get_movements("owner-1", item.id) == []

    async def test_no_threshold_stays_in_stock(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=10, min_quantity=None))

        updated, _ = await inventory_store.apply_movement("owner-1", item.id, MovementType.USAGE, 7)

        assert updated.quantity == 3
        assert updated.status == StockStatus.IN_STOCK

    async def test_return_from_zero(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=0, min_quantity=5))

        updated, movement = await inventory_store.apply_movement(
            "owner-1", item.id, MovementType.RETURN, 4
        )

        assert updated.quantity == 4
        assert updated.status == StockStatus.LOW_STOCK
        assert (movement.previous_quantity, movement.new_quantity) == (0, 4)

    async def test_stored_status_refreshed(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=10, min_quantity=5))
        await inventory_store.apply_movement("owner-1", item.id, MovementType.USAGE, 10)

        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT status, total_value FROM inventory_items WHERE id = ?", (item.id,)
            )
            row = await cursor.fetchone()
        assert row["status"] == "OUT_OF_STOCK"
        assert row["total_value"] == 0

    async def test_other_owner_cannot_move(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item())
        with pytest.raises(InventoryItemNotFoundError):
            await inventory_store.apply_movement("owner-2", item.id, MovementType.PURCHASE, 1)

    async def test_reference_and_recent_movements(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=10))
        await inventory_store.apply_movement("owner-1", item.id, MovementType.USAGE, 1)

        updated, movement = await inventory_store.apply_movement(
            "owner-1",
            item.id,
            MovementType.SALE,
            2,
            notes="Sold in SL2610-0001",
            reference=MovementReference(kind=ReferenceKind.SALE, id="1"),
            movements_limit=10,
        )

        assert [m.movement_type for m in updated.movements] == [
            MovementType.SALE,
            MovementType.USAGE,
        ]
        stored = (await inventory_store.get_movements("owner-1", item.id))[0]
        assert stored.id == movement.id
        assert stored.reference.kind == ReferenceKind.SALE
        assert stored.reference.id == "1"
        assert stored.notes == "Sold in SL2610-0001"

    async def test_movement_paging(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item(quantity=10))
        for _ in range(5):
            await inventory_store.apply_movement("owner-1", item.id, MovementType.PURCHASE, 1)

        page = await inventory_store.get_movements("owner-1", item.id, limit=2, offset=1)
        assert [m.new_quantity for m in page] == [14, 13]
        assert await inventory_store.get_movements("owner-2", item.id) == []

    async def test_movements_are_append_only(self, inventory_store, new_item):
        item = await inventory_store.create_item(new_item())
        _, movement = await inventory_store.apply_movement(
            "owner-1", item.id, MovementType.USAGE, 1
        )

        async with get_connection() as conn:
            with pytest.raises(aiosqlite.IntegrityError, match="append-only"):
                await conn.execute(
                    "UPDATE inventory_movements SET quantity = 100 WHERE id = ?",
                    (movement.id,),
                )
            await conn.rollback()

    async def test_concurrent_usage_never_overdraws(self, inventory_store, new_item):
        """Ten parallel withdrawals of 3 from 10: exactly three succeed."""
        item = await inventory_store.create_item(new_item(quantity=10, min_quantity=None))

        results = await asyncio.gather(
            *(
                inventory_store.apply_movement("owner-1", item.id, MovementType.USAGE, 3)
                for _ in range(10)
            ),
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, BaseException)]
        failed = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(succeeded) == 3
        assert len(failed) == 7

        fetched = await inventory_store.get_item("owner-1", item.id)
        assert fetched.quantity == 1

        movements = await inventory_store.get_movements("owner-1", item.id)
        chain = sorted((m.previous_quantity, m.new_quantity) for m in movements)
        assert chain == [(4, 1), (7, 4), (10, 7)]
