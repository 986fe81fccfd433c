"""
MongoDB access for the Tastify API

The connection is configured from DATABASE_URL / DATABASE_NAME. When no URL
is set, ``db`` stays None and every endpoint answers 500.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from dotenv import load_dotenv
from fastapi import HTTPException
from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.database import Database

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "tastify")

db: Optional[Database] = None

if DATABASE_URL:
    _client = MongoClient(DATABASE_URL)
    db = _client[DATABASE_NAME]
    logger.info("Using MongoDB database %s", DATABASE_NAME)
else:
    logger.warning("DATABASE_URL is not set, database disabled")


def get_db() -> Database:
    """FastAPI dependency returning the configured database."""
    if db is None:
        raise HTTPException(status_code=500, detail="Database not available")
    return db


def object_id(id_str: str) -> ObjectId:
    try:
        return ObjectId(id_str)
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid id")


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to naive UTC, the form pymongo hands back."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Replace the ObjectId ``_id`` with a string ``id``."""
    if doc is None:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


def _as_dict(data: Union[BaseModel, dict]) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def create_document(database: Database, collection_name: str, data: Union[BaseModel, dict]) -> str:
    doc = _as_dict(data)
    doc.pop("id", None)
    result = database[collection_name].insert_one(doc)
    return str(result.inserted_id)


def get_documents(
    database: Database,
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    sort: Optional[List[tuple]] = None,
) -> List[Dict[str, Any]]:
    cursor = database[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    return [serialize(d) for d in cursor]


def get_document(database: Database, collection_name: str, doc_id: str) -> Optional[Dict[str, Any]]:
    return serialize(database[collection_name].find_one({"_id": object_id(doc_id)}))


def require_document(database: Database, collection_name: str, doc_id: str, label: str) -> Dict[str, Any]:
    doc = get_document(database, collection_name, doc_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return doc


def replace_document(database: Database, collection_name: str, doc_id: str, data: Union[BaseModel, dict]) -> bool:
    doc = _as_dict(data)
    doc.pop("id", None)
    res = database[collection_name].replace_one({"_id": object_id(doc_id)}, doc)
    return res.matched_count > 0


def delete_document(database: Database, collection_name: str, doc_id: str) -> bool:
    res = database[collection_name].delete_one({"_id": object_id(doc_id)})
    return res.deleted_count > 0
