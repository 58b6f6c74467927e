from .health import router as health_router
from .menu_items import router as menu_items_router
from .orders import router as orders_router
from .outlets import router as outlets_router
from .pages import router as pages_router

__all__ = [
    "health_router",
    "menu_items_router",
    "orders_router",
    "outlets_router",
    "pages_router",
]
