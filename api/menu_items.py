from typing import Optional

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import get_db, serialize
from schemas import MenuItem, MenuItemUpdate
from services import menu_service

router = APIRouter(prefix="/api/menu-items", tags=["menu-items"])


def _parse_limit(limit: Optional[str]) -> Optional[int]:
    # non-numeric or non-positive limits are ignored
    try:
        parsed = int(limit) if limit is not None else None
    except ValueError:
        return None
    return parsed if parsed and parsed > 0 else None


@router.get("")
def list_menu_items(
    outlet: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[str] = None,
    db: Database = Depends(get_db),
):
    items = menu_service.list_menu_items(db, outlet=outlet, category=category, limit=_parse_limit(limit))
    return {"menuItems": serialize(items)}


@router.get("/{item_id}")
def get_menu_item(item_id: str, db: Database = Depends(get_db)):
    return {"menuItem": serialize(menu_service.get_menu_item(db, item_id))}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_menu_item(body: MenuItem, db: Database = Depends(get_db)):
    return {"menuItem": serialize(menu_service.create_menu_item(db, body))}


@router.put("/{item_id}")
def update_menu_item(item_id: str, body: MenuItemUpdate, db: Database = Depends(get_db)):
    return {"menuItem": serialize(menu_service.update_menu_item(db, item_id, body))}


@router.delete("/{item_id}")
def delete_menu_item(item_id: str, db: Database = Depends(get_db)):
    menu_service.delete_menu_item(db, item_id)
    return {"message": "Menu item deleted successfully"}
