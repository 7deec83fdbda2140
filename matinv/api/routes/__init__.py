"""API route modules."""

from matinv.api.routes.health import router as health_router
from matinv.api.routes.materials import router as materials_router
from matinv.api.routes.reports import router as reports_router
from matinv.api.routes.stock import router as stock_router
from matinv.api.routes.suppliers import router as suppliers_router
from matinv.api.routes.users import router as users_router
from matinv.api.routes.warehouses import router as warehouses_router

__all__ = [
    "health_router",
    "materials_router",
    "stock_router",
    "suppliers_router",
    "warehouses_router",
    "reports_router",
    "users_router",
]
