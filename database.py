"""
MongoDB access for the ordering API.

The client is created lazily by `connect()` at application startup; request
handlers receive the database through the `get_db` dependency so tests can
swap in another database.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from config import settings
from errors import ValidationError

logger = logging.getLogger("qmanage")

OUTLETS = "outlets"
MENU_ITEMS = "menuitems"
ORDERS = "orders"

_client: Optional[MongoClient] = None
db: Optional[Database] = None


def connect() -> Database:
    """Open the client, verify the server answers and create indexes."""
    global _client, db
    _client = MongoClient(settings.mongodb_uri, serverSelectionTimeoutMS=5000)
    _client.admin.command("ping")
    db = _client[settings.database_name]
    ensure_indexes(db)
    return db


def close() -> None:
    global _client, db
    if _client is not None:
        _client.close()
    _client = None
    db = None


def get_optional_db() -> Optional[Database]:
    return db


def get_db() -> Database:
    if db is None:
        raise RuntimeError("Database not configured")
    return db


def ensure_indexes(database: Database) -> None:
    database[OUTLETS].create_index([("name", ASCENDING)], unique=True)
    database[MENU_ITEMS].create_index(
        [("name", ASCENDING), ("outlet", ASCENDING)], unique=True
    )
    database[ORDERS].create_index([("createdAt", ASCENDING)])


# ---------------------- Helpers ----------------------
def to_object_id(id_str: Any, message: str = "Invalid id format") -> ObjectId:
    if isinstance(id_str, ObjectId):
        return id_str
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        raise ValidationError(message)


def is_object_id(value: Any) -> bool:
    return isinstance(value, ObjectId) or (isinstance(value, str) and ObjectId.is_valid(value))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_document(database: Database, collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Insert a document stamped with createdAt/updatedAt and return it with its _id."""
    if isinstance(data, BaseModel):
        data_dict = data.model_dump(by_alias=True)
    else:
        data_dict = dict(data)
    now = utcnow()
    data_dict["createdAt"] = now
    data_dict["updatedAt"] = now
    result = database[collection_name].insert_one(data_dict)
    data_dict["_id"] = result.inserted_id
    return data_dict


def get_documents(
    database: Database,
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    sort: Optional[List[tuple]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    cursor = database[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def serialize(value: Any) -> Any:
    """Make a raw Mongo document JSON friendly: `_id` becomes `id`, ObjectIds become strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [serialize(item) for item in value]
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            if key == "_id":
                out["id"] = str(item)
            else:
                out[key] = serialize(item)
        return out
    return value
