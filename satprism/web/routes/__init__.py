"""API routers."""

from satprism.web.routes.health import router as health_router
from satprism.web.routes.transactions import router as transactions_router

__all__ = ["health_router", "transactions_router"]
