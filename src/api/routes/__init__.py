"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.inventory import router as inventory_router

__all__ = ["health_router", "inventory_router"]
