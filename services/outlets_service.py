import logging
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from database import MENU_ITEMS, OUTLETS, create_document, get_documents, to_object_id, utcnow
from errors import DuplicateError, NotFoundError
from schemas import Outlet, OutletUpdate

logger = logging.getLogger("qmanage")

DUPLICATE_OUTLET_MESSAGE = "Outlet with this name already exists"


def list_outlets(db: Database, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return get_documents(db, OUTLETS, sort=[("name", 1)], limit=limit)


def outlet_exists(db: Database, outlet_id: Any) -> bool:
    return db[OUTLETS].find_one({"_id": outlet_id}, {"_id": 1}) is not None


def get_outlet(db: Database, outlet_id: str) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """Return the outlet and its menu items."""
    outlet = db[OUTLETS].find_one({"_id": to_object_id(outlet_id)})
    if not outlet:
        raise NotFoundError("Outlet not found")
    menu_items = get_documents(db, MENU_ITEMS, {"outlet": outlet["_id"]})
    return outlet, menu_items


def create_outlet(db: Database, payload: Outlet) -> Dict[str, Any]:
    try:
        return create_document(db, OUTLETS, payload)
    except DuplicateKeyError as exc:
        raise DuplicateError(DUPLICATE_OUTLET_MESSAGE) from exc


def update_outlet(db: Database, outlet_id: str, payload: OutletUpdate) -> Dict[str, Any]:
    changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    changes["updatedAt"] = utcnow()
    try:
        outlet = db[OUTLETS].find_one_and_update(
            {"_id": to_object_id(outlet_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError as exc:
        raise DuplicateError(DUPLICATE_OUTLET_MESSAGE) from exc
    if not outlet:
        raise NotFoundError("Outlet not found")
    return outlet


def delete_outlet(db: Database, outlet_id: str) -> None:
    """Delete an outlet together with every menu item that references it."""
    _id = to_object_id(outlet_id)
    if not outlet_exists(db, _id):
        raise NotFoundError("Outlet not found")
    removed = db[MENU_ITEMS].delete_many({"outlet": _id})
    db[OUTLETS].delete_one({"_id": _id})
    logger.info("Deleted outlet %s and %s menu items", outlet_id, removed.deleted_count)
