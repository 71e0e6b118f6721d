"""SQLite implementation of sales storage."""

from datetime import date

import aiosqlite

from agroledger.config import get_logger
from agroledger.core.entities.inventory import utcnow
from agroledger.core.entities.sale import (
    PaymentMethod,
    PaymentStatus,
    ProductType,
    Sale,
    SaleItem,
)
from agroledger.core.exceptions import SaleNotFoundError
from agroledger.core.interfaces.sales_store import ISalesStore, SaleFilter
from agroledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    join_transaction,
)
from agroledger.infrastructure.storage.sqlite.rows import parse_date, parse_datetime

logger = get_logger(__name__)


def _where(owner_id: str, filters: SaleFilter | None) -> tuple[str, list]:
    """Build the WHERE clause shared by list and count."""
    clause = "WHERE owner_id = ?"
    params: list = [owner_id]
    if filters is None:
        return clause, params

    if filters.payment_status:
        clause += " AND payment_status = ?"
        params.append(filters.payment_status.value)
    if filters.start_date:
        clause += " AND sale_date >= ?"
        params.append(filters.start_date.isoformat())
    if filters.end_date:
        clause += " AND sale_date <= ?"
        params.append(filters.end_date.isoformat())
    if filters.search:
        pattern = f"%{filters.search}%"
        clause += (
            " AND (sale_number LIKE ? COLLATE NOCASE"
            " OR customer_name LIKE ? COLLATE NOCASE"
            " OR customer_phone LIKE ?)"
        )
        params.extend([pattern, pattern, pattern])
    return clause, params


class SQLiteSalesStore(ISalesStore):
    """SQLite implementation of sale storage."""

    async def create_sale(
        self, sale: Sale, conn: aiosqlite.Connection | None = None
    ) -> Sale:
        """Create a sale with all its items."""
        now = utcnow()
        sale.created_at = now
        sale.updated_at = now
        async with join_transaction(conn) as tx:
            # Insert sale header
            cursor = await tx.execute(
                """
                INSERT INTO sales (
                    owner_id, sale_number, sale_date,
                    customer_name, customer_phone, customer_email, customer_address,
                    subtotal, discount, tax, total_amount,
                    payment_method, payment_status, paid_amount, paid_at,
                    notes, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    sale.owner_id,
                    sale.sale_number,
                    sale.sale_date.isoformat(),
                    sale.customer_name,
                    sale.customer_phone,
                    sale.customer_email,
                    sale.customer_address,
                    sale.subtotal,
                    sale.discount,
                    sale.tax,
                    sale.total_amount,
                    sale.payment_method.value if sale.payment_method else None,
                    sale.payment_status.value,
                    sale.paid_amount,
                    sale.paid_at.isoformat() if sale.paid_at else None,
                    sale.notes,
                    sale.created_at.isoformat(),
                    sale.updated_at.isoformat(),
                ),
            )
            sale.id = cursor.lastrowid

            # Insert items
            for item in sale.items:
                item.sale_id = sale.id
                item_cursor = await tx.execute(
                    """
                    INSERT INTO sale_items (
                        sale_id, product_type, product_name, quantity, unit,
                        unit_price, total_price, inventory_item_id, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        item.sale_id,
                        item.product_type.value,
                        item.product_name,
                        item.quantity,
                        item.unit,
                        item.unit_price,
                        item.total_price,
                        item.inventory_item_id,
                        now.isoformat(),
                    ),
                )
                item.id = item_cursor.lastrowid

            logger.info(
                "sale_created",
                sale_id=sale.id,
                sale_number=sale.sale_number,
                items=len(sale.items),
                total=sale.total_amount,
            )
            return sale

    async def update_sale(
        self, sale: Sale, conn: aiosqlite.Connection | None = None
    ) -> Sale:
        """Update customer and payment fields; lines and totals are fixed at creation."""
        sale.updated_at = utcnow()
        async with join_transaction(conn) as tx:
            cursor = await tx.execute(
                """
                UPDATE sales SET
                    customer_name = ?,
                    customer_phone = ?,
                    customer_email = ?,
                    customer_address = ?,
                    payment_method = ?,
                    payment_status = ?,
                    paid_amount = ?,
                    paid_at = ?,
                    notes = ?,
                    updated_at = ?
                WHERE id = ? AND owner_id = ?
                """,
                (
                    sale.customer_name,
                    sale.customer_phone,
                    sale.customer_email,
                    sale.customer_address,
                    sale.payment_method.value if sale.payment_method else None,
                    sale.payment_status.value,
                    sale.paid_amount,
                    sale.paid_at.isoformat() if sale.paid_at else None,
                    sale.notes,
                    sale.updated_at.isoformat(),
                    sale.id,
                    sale.owner_id,
                ),
            )
            if cursor.rowcount == 0:
                raise SaleNotFoundError(sale.id)  # type: ignore[arg-type]

            logger.info(
                "sale_updated",
                sale_id=sale.id,
                payment_status=sale.payment_status.value,
                paid_amount=sale.paid_amount,
            )
            return sale

    async def get_sale(
        self, owner_id: str, sale_id: int, conn: aiosqlite.Connection | None = None
    ) -> Sale | None:
        """Get an owner's sale by ID with items."""
        if conn is not None:
            return await self._load_sale(conn, owner_id, sale_id)
        async with get_connection() as own:
            return await self._load_sale(own, owner_id, sale_id)

    async def list_sales(
        self,
        owner_id: str,
        filters: SaleFilter | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Sale]:
        """List an owner's sales, newest first."""
        where, params = _where(owner_id, filters)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM sales
                {where}
                ORDER BY sale_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()

            items_by_sale = await self._fetch_items(conn, [row["id"] for row in rows])
            return [self._row_to_sale(row, items_by_sale.get(row["id"], [])) for row in rows]

    async def count_sales(self, owner_id: str, filters: SaleFilter | None = None) -> int:
        """Count an owner's sales matching the filters."""
        where, params = _where(owner_id, filters)
        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM sales {where}", params)
            row = await cursor.fetchone()
            return row[0]

    async def last_sale_sequence(
        self, owner_id: str, conn: aiosqlite.Connection | None = None
    ) -> int:
        """Highest numeric suffix of an owner's sale numbers (SL2610-0007 -> 7)."""
        query = "SELECT sale_number FROM sales WHERE owner_id = ?"
        if conn is not None:
            rows = await conn.execute_fetchall(query, (owner_id,))
        else:
            async with get_connection() as own:
                rows = await own.execute_fetchall(query, (owner_id,))

        highest = 0
        for row in rows:
            suffix = row["sale_number"].rpartition("-")[2]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return highest

    async def summarize(self, owner_id: str) -> dict[str, float]:
        """Count, revenue and amount received over all of an owner's sales."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    COUNT(*) AS total_sales,
                    COALESCE(SUM(total_amount), 0) AS total_revenue,
                    COALESCE(SUM(paid_amount), 0) AS total_received
                FROM sales
                WHERE owner_id = ?
                """,
                (owner_id,),
            )
            row = await cursor.fetchone()
            return {
                "total_sales": row["total_sales"],
                "total_revenue": float(row["total_revenue"]),
                "total_received": float(row["total_received"]),
            }

    async def delete_sale(
        self, owner_id: str, sale_id: int, conn: aiosqlite.Connection | None = None
    ) -> bool:
        """Delete a sale; its items go with it (ON DELETE CASCADE)."""
        async with join_transaction(conn) as tx:
            cursor = await tx.execute(
                "DELETE FROM sales WHERE id = ? AND owner_id = ?",
                (sale_id, owner_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("sale_deleted", sale_id=sale_id)
            return deleted

    async def _load_sale(
        self, conn: aiosqlite.Connection, owner_id: str, sale_id: int
    ) -> Sale | None:
        cursor = await conn.execute(
            "SELECT * FROM sales WHERE id = ? AND owner_id = ?",
            (sale_id, owner_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        items_by_sale = await self._fetch_items(conn, [sale_id])
        return self._row_to_sale(row, items_by_sale.get(sale_id, []))

    async def _fetch_items(
        self, conn: aiosqlite.Connection, sale_ids: list[int]
    ) -> dict[int, list[SaleItem]]:
        """Lines for several sales in one query, grouped by sale id."""
        if not sale_ids:
            return {}
        placeholders = ", ".join("?" * len(sale_ids))
        cursor = await conn.execute(
            f"SELECT * FROM sale_items WHERE sale_id IN ({placeholders}) ORDER BY sale_id, id",
            sale_ids,
        )
        rows = await cursor.fetchall()

        grouped: dict[int, list[SaleItem]] = {}
        for r in rows:
            grouped.setdefault(r["sale_id"], []).append(self._row_to_sale_item(r))
        return grouped

    @staticmethod
    def _row_to_sale(row: aiosqlite.Row, items: list[SaleItem]) -> Sale:
        """Convert a database row to a Sale entity."""
        return Sale(
            id=row["id"],
            owner_id=row["owner_id"],
            sale_number=row["sale_number"],
            sale_date=parse_date(row["sale_date"]) or date.today(),
            customer_name=row["customer_name"],
            customer_phone=row["customer_phone"],
            customer_email=row["customer_email"],
            customer_address=row["customer_address"],
            subtotal=float(row["subtotal"]),
            discount=float(row["discount"]),
            tax=float(row["tax"]),
            payment_method=PaymentMethod(row["payment_method"]) if row["payment_method"] else None,
            payment_status=PaymentStatus(row["payment_status"]),
            paid_amount=float(row["paid_amount"]),
            paid_at=parse_datetime(row["paid_at"]),
            notes=row["notes"],
            items=items,
            created_at=parse_datetime(row["created_at"]) or utcnow(),
            updated_at=parse_datetime(row["updated_at"]) or utcnow(),
        )

    @staticmethod
    def _row_to_sale_item(row: aiosqlite.Row) -> SaleItem:
        """Convert a database row to a SaleItem entity."""
        return SaleItem(
            id=row["id"],
            sale_id=row["sale_id"],
            product_type=ProductType(row["product_type"]),
            product_name=row["product_name"],
            quantity=float(row["quantity"]),
            unit=row["unit"],
            unit_price=float(row["unit_price"]),
            inventory_item_id=row["inventory_item_id"],
        )
