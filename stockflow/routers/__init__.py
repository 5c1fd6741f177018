from stockflow.routers.alerts import router as alerts_router
from stockflow.routers.companies import router as companies_router
from stockflow.routers.health import router as health_router
from stockflow.routers.inventory import router as inventory_router
from stockflow.routers.products import router as products_router

__all__ = [
    "alerts_router",
    "companies_router",
    "health_router",
    "inventory_router",
    "products_router",
]
