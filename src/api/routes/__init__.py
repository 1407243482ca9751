"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.reports import router as reports_router
from src.api.routes.stock import router as stock_router

__all__ = [
    "health_router",
    "reports_router",
    "stock_router",
]
