from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from database import get_db, serialize
from schemas import Outlet, OutletUpdate
from services import outlets_service

router = APIRouter(prefix="/api/outlets", tags=["outlets"])


@router.get("")
def list_outlets(db: Database = Depends(get_db)):
    return {"outlets": serialize(outlets_service.list_outlets(db))}


@router.get("/{outlet_id}")
def get_outlet(outlet_id: str, db: Database = Depends(get_db)):
    outlet, menu_items = outlets_service.get_outlet(db, outlet_id)
    return {"outlet": serialize(outlet), "menuItems": serialize(menu_items)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_outlet(body: Outlet, db: Database = Depends(get_db)):
    return {"outlet": serialize(outlets_service.create_outlet(db, body))}


@router.put("/{outlet_id}")
def update_outlet(outlet_id: str, body: OutletUpdate, db: Database = Depends(get_db)):
    return {"outlet": serialize(outlets_service.update_outlet(db, outlet_id, body))}


@router.delete("/{outlet_id}")
def delete_outlet(outlet_id: str, db: Database = Depends(get_db)):
    """Deletes the outlet and all of its menu items."""
    outlets_service.delete_outlet(db, outlet_id)
    return {"message": "Outlet deleted successfully"}
