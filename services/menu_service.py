import logging
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from database import (
    MENU_ITEMS,
    OUTLETS,
    create_document,
    get_documents,
    is_object_id,
    to_object_id,
    utcnow,
)
from errors import DuplicateError, NotFoundError, ValidationError
from schemas import MenuItem, MenuItemUpdate
from services.outlets_service import outlet_exists

logger = logging.getLogger("qmanage")

DUPLICATE_MENU_ITEM_MESSAGE = "Menu item already exists for this outlet"


def populate_outlets(
    db: Database,
    docs: List[Dict[str, Any]],
    fields: Iterable[str] = ("name", "location"),
) -> List[Dict[str, Any]]:
    """Replace each document's `outlet` id with a small outlet summary (None when gone)."""
    outlet_ids = {doc.get("outlet") for doc in docs if doc.get("outlet") is not None}
    if not outlet_ids:
        return docs
    projection = {field: 1 for field in fields}
    outlets = {
        outlet["_id"]: outlet
        for outlet in db[OUTLETS].find({"_id": {"$in": list(outlet_ids)}}, projection)
    }
    for doc in docs:
        if doc.get("outlet") is not None:
            doc["outlet"] = outlets.get(doc["outlet"])
    return docs


def _resolve_outlet(db: Database, outlet_ref: Optional[str]) -> Any:
    """Reject writes pointing at an outlet that does not exist."""
    outlet_id = to_object_id(outlet_ref, "Invalid outlet")
    if not outlet_exists(db, outlet_id):
        raise ValidationError("Invalid outlet")
    return outlet_id


def list_menu_items(
    db: Database,
    outlet: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Menu items, newest first.

    `outlet` may be an outlet id or an outlet name; a name that matches no
    outlet yields no items.
    """
    filt: Dict[str, Any] = {}
    if outlet:
        if is_object_id(outlet):
            filt["outlet"] = to_object_id(outlet)
        else:
            outlet_doc = db[OUTLETS].find_one({"name": outlet}, {"_id": 1})
            if not outlet_doc:
                return []
            filt["outlet"] = outlet_doc["_id"]
    if category:
        filt["category"] = category
    items = get_documents(db, MENU_ITEMS, filt, sort=[("updatedAt", -1)], limit=limit)
    return populate_outlets(db, items)


def get_menu_item(db: Database, item_id: str) -> Dict[str, Any]:
    item = db[MENU_ITEMS].find_one({"_id": to_object_id(item_id)})
    if not item:
        raise NotFoundError("Menu item not found")
    return populate_outlets(db, [item])[0]


def create_menu_item(db: Database, payload: MenuItem) -> Dict[str, Any]:
    data = payload.model_dump(by_alias=True)
    data["outlet"] = _resolve_outlet(db, payload.outlet)
    try:
        created = create_document(db, MENU_ITEMS, data)
    except DuplicateKeyError as exc:
        raise DuplicateError(DUPLICATE_MENU_ITEM_MESSAGE) from exc
    logger.info("Created menu item %s for outlet %s", created["_id"], payload.outlet)
    return created


def update_menu_item(db: Database, item_id: str, payload: MenuItemUpdate) -> Dict[str, Any]:
    _id = to_object_id(item_id)
    changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    if "outlet" in changes:
        changes["outlet"] = _resolve_outlet(db, changes["outlet"])
    changes["updatedAt"] = utcnow()
    try:
        item = db[MENU_ITEMS].find_one_and_update(
            {"_id": _id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError as exc:
        raise DuplicateError(DUPLICATE_MENU_ITEM_MESSAGE) from exc
    if not item:
        raise NotFoundError("Menu item not found")
    return item


def delete_menu_item(db: Database, item_id: str) -> None:
    result = db[MENU_ITEMS].delete_one({"_id": to_object_id(item_id)})
    if result.deleted_count == 0:
        raise NotFoundError("Menu item not found")


def list_categories(db: Database) -> List[str]:
    return sorted(cat for cat in db[MENU_ITEMS].distinct("category") if cat)
