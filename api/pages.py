from fastapi import APIRouter, Depends
from pymongo.database import Database

from database import get_db
from services import pages_service

router = APIRouter(prefix="/api", tags=["pages"])


@router.get("/pages/home")
def home_page(db: Database = Depends(get_db)):
    return pages_service.home_data(db)


@router.get("/pages/menu")
def menu_page(db: Database = Depends(get_db)):
    return pages_service.menu_data(db)


@router.get("/pages/checkout")
def checkout_page(db: Database = Depends(get_db)):
    return pages_service.checkout_data(db)


@router.get("/admin/dashboard")
def admin_dashboard(db: Database = Depends(get_db)):
    return {"stats": pages_service.dashboard_stats(db)}
