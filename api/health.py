from typing import Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from config import settings
from database import get_optional_db

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health(db: Optional[Database] = Depends(get_optional_db)):
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_name": settings.database_name,
        "connection_status": "Not Connected",
        "collections": [],
    }
    if db is None:
        response["database"] = "⚠️ Available but not initialized"
        return response
    try:
        collections = db.list_collection_names()
        response["collections"] = collections[:10]
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except Exception as e:
        response["database"] = f"⚠️ Connected but Error: {str(e)[:80]}"
    return response
