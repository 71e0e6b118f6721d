"""API route modules."""

from agroledger.api.routes.health import router as health_router
from agroledger.api.routes.inventory import router as inventory_router
from agroledger.api.routes.sales import router as sales_router

__all__ = [
    "health_router",
    "inventory_router",
    "sales_router",
]
