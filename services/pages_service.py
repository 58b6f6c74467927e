import logging
from typing import Any, Callable, Dict, List

from pymongo.database import Database
from pymongo.errors import PyMongoError

import sample_data
from database import MENU_ITEMS, OUTLETS, get_documents, serialize
from services import menu_service, orders_service, outlets_service

logger = logging.getLogger("qmanage")


def fetch_with_fallback(fetcher: Callable[[], List[Any]], fallback: Callable[[], List[Any]]) -> List[Any]:
    """Use the database result unless it is empty or the query fails."""
    try:
        result = fetcher()
    except PyMongoError as exc:
        logger.warning("Page query failed, serving sample data: %s", exc)
        return fallback()
    if not result:
        return fallback()
    return serialize(result)


def home_data(db: Database) -> Dict[str, Any]:
    available = {"isAvailable": True}
    return {
        "featuredProducts": fetch_with_fallback(
            lambda: get_documents(db, MENU_ITEMS, available, sort=[("updatedAt", -1)], limit=6),
            sample_data.featured_samples,
        ),
        "bestSelling": fetch_with_fallback(
            lambda: get_documents(db, MENU_ITEMS, available, sort=[("createdAt", -1)], limit=8),
            sample_data.best_selling_samples,
        ),
        "outlets": fetch_with_fallback(
            lambda: outlets_service.list_outlets(db, limit=8),
            sample_data.outlet_samples,
        ),
    }


def menu_data(db: Database) -> Dict[str, Any]:
    return {
        "categories": fetch_with_fallback(
            lambda: menu_service.list_categories(db),
            sample_data.category_samples,
        )
    }


def checkout_data(db: Database) -> Dict[str, Any]:
    return {
        "outlets": fetch_with_fallback(
            lambda: outlets_service.list_outlets(db),
            sample_data.outlet_samples,
        )
    }


def dashboard_stats(db: Database) -> Dict[str, Any]:
    """Counts and recent orders for the admin dashboard; each stat degrades on its own."""
    stats: Dict[str, Any] = {"totalOutlets": 0, "totalMenuItems": 0, "recentOrders": []}
    try:
        stats["totalOutlets"] = db[OUTLETS].count_documents({})
    except PyMongoError as exc:
        logger.warning("Could not count outlets: %s", exc)
    try:
        stats["totalMenuItems"] = db[MENU_ITEMS].count_documents({})
    except PyMongoError as exc:
        logger.warning("Could not count menu items: %s", exc)
    try:
        stats["recentOrders"] = serialize(orders_service.recent_orders(db, limit=5))
    except PyMongoError as exc:
        logger.warning("Could not load recent orders: %s", exc)
    return stats
