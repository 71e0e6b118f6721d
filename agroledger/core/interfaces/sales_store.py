"""Abstract interface for sales storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any

from agroledger.core.entities.sale import PaymentStatus, Sale


@dataclass
class SaleFilter:
    """Criteria for listing and counting an owner's sales."""

    payment_status: PaymentStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None  # sale number, customer name or phone


class ISalesStore(ABC):
    """Interface for sale persistence."""

    @abstractmethod
    async def create_sale(self, sale: Sale, conn: Any = None) -> Sale:
        """Create a sale with all its items."""
        pass

    @abstractmethod
    async def update_sale(self, sale: Sale, conn: Any = None) -> Sale:
        """Update a sale's customer and payment fields."""
        pass

    @abstractmethod
    async def get_sale(self, owner_id: str, sale_id: int, conn: Any = None) -> Sale | None:
        """Get an owner's sale with items."""
        pass

    @abstractmethod
    async def list_sales(
        self,
        owner_id: str,
        filters: SaleFilter | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Sale]:
        """List an owner's sales, newest first."""
        pass

    @abstractmethod
    async def count_sales(self, owner_id: str, filters: SaleFilter | None = None) -> int:
        """Count an owner's sales matching the filters."""
        pass

    @abstractmethod
    async def last_sale_sequence(self, owner_id: str, conn: Any = None) -> int:
        """Highest numeric suffix among an owner's sale numbers, 0 if none."""
        pass

    @abstractmethod
    async def summarize(self, owner_id: str) -> dict[str, float]:
        """Totals over all of an owner's sales: count, revenue, received."""
        pass

    @abstractmethod
    async def delete_sale(self, owner_id: str, sale_id: int, conn: Any = None) -> bool:
        """Delete a sale and its items."""
        pass
