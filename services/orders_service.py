import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

from database import MENU_ITEMS, ORDERS, create_document, get_documents, is_object_id, to_object_id, utcnow
from errors import NotFoundError, ValidationError
from schemas import Order, OrderCreate, OrderItem, OrderStatus, OrderUpdate
from services.menu_service import populate_outlets
from services.outlets_service import outlet_exists

logger = logging.getLogger("qmanage")


def _populate_menu_items(db: Database, orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Attach {_id, name, price} of the live menu item to each line; the snapshot fields stay."""
    ids = {
        item.get("menuItem")
        for order in orders
        for item in order.get("items", [])
        if isinstance(item.get("menuItem"), ObjectId)
    }
    if not ids:
        return orders
    live = {
        doc["_id"]: doc
        for doc in db[MENU_ITEMS].find({"_id": {"$in": list(ids)}}, {"name": 1, "price": 1})
    }
    for order in orders:
        for item in order.get("items", []):
            item["menuItem"] = live.get(item.get("menuItem"))
    return orders


def _populate(db: Database, orders: List[Dict[str, Any]], with_items: bool = True) -> List[Dict[str, Any]]:
    populate_outlets(db, orders)
    if with_items:
        _populate_menu_items(db, orders)
    return orders


def create_order(db: Database, payload: OrderCreate) -> Dict[str, Any]:
    """Persist an order priced exclusively from the menu items stored server-side.

    Raises ValidationError when the outlet does not exist or no items were
    sent, and NotFoundError when any referenced menu item is missing. Nothing
    is written unless every item resolves.
    """
    if not is_object_id(payload.outlet) or not outlet_exists(db, ObjectId(payload.outlet)):
        raise ValidationError("Invalid outlet")
    if not payload.items:
        raise ValidationError("Order must contain items")

    lines: List[OrderItem] = []
    for requested in payload.items:
        menu_item = None
        if is_object_id(requested.menu_item):
            menu_item = db[MENU_ITEMS].find_one({"_id": ObjectId(requested.menu_item)})
        if not menu_item:
            raise NotFoundError(f"Menu item not found: {requested.menu_item}")
        lines.append(
            OrderItem(
                menu_item=str(menu_item["_id"]),
                name=menu_item["name"],
                price=menu_item["price"],
                quantity=requested.quantity,
            )
        )

    total_amount = sum(line.price * line.quantity for line in lines)
    order = Order(
        customer=payload.customer,
        outlet=payload.outlet,
        items=lines,
        total_amount=total_amount,
        notes=payload.notes,
        status='pending',
    )
    data = order.model_dump(by_alias=True)
    data["outlet"] = ObjectId(payload.outlet)
    for item in data["items"]:
        item["menuItem"] = ObjectId(item["menuItem"])
    created = create_document(db, ORDERS, data)
    logger.info(
        "Created order %s outlet=%s items=%s total=%s",
        created["_id"], payload.outlet, len(lines), total_amount,
    )
    return created


def list_orders(db: Database, status: Optional[str] = None, outlet: Optional[str] = None) -> List[Dict[str, Any]]:
    filt: Dict[str, Any] = {}
    if status:
        filt["status"] = status
    if outlet:
        filt["outlet"] = to_object_id(outlet)
    orders = get_documents(db, ORDERS, filt, sort=[("createdAt", -1)])
    return _populate(db, orders)


def recent_orders(db: Database, limit: int = 5) -> List[Dict[str, Any]]:
    orders = get_documents(db, ORDERS, sort=[("createdAt", -1)], limit=limit)
    populate_outlets(db, orders, fields=("name",))
    return orders


def get_order(db: Database, order_id: str) -> Dict[str, Any]:
    order = db[ORDERS].find_one({"_id": to_object_id(order_id)})
    if not order:
        raise NotFoundError("Order not found")
    return _populate(db, [order])[0]


def _apply_update(db: Database, order_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    changes["updatedAt"] = utcnow()
    order = db[ORDERS].find_one_and_update(
        {"_id": to_object_id(order_id)},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if not order:
        raise NotFoundError("Order not found")
    return order


def update_order_status(db: Database, order_id: str, status: OrderStatus) -> Dict[str, Any]:
    """Set any status from any status; admins drive the lifecycle."""
    order = _apply_update(db, order_id, {"status": status})
    logger.info("Order %s status -> %s", order_id, status)
    return _populate(db, [order], with_items=False)[0]


def update_order(db: Database, order_id: str, payload: OrderUpdate) -> Dict[str, Any]:
    changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    order = _apply_update(db, order_id, changes)
    return _populate(db, [order])[0]


def delete_order(db: Database, order_id: str) -> None:
    result = db[ORDERS].delete_one({"_id": to_object_id(order_id)})
    if result.deleted_count == 0:
        raise NotFoundError("Order not found")
