"""
MongoDB access for the Mood Journal API

A single MongoClient is created at import time from the environment. When no
connection string is configured, or it is not a valid MongoDB URI, `db` stays
None and every helper raises StorageUnavailable instead.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from dotenv import load_dotenv
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient
from pymongo.errors import ConfigurationError, PyMongoError

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "moodjournal")


class StorageUnavailable(Exception):
    """MongoDB is not configured, unreachable, or rejected the operation."""


def connect(url: Optional[str], name: str) -> Tuple[Optional[MongoClient], Any]:
    """Build the client and database handle, or (None, None) when unusable."""
    if not url:
        logger.warning("[db] DATABASE_URL not set; storage is unavailable")
        return None, None
    try:
        mongo_client = MongoClient(url)
    except ConfigurationError as e:
        logger.error("[db] invalid DATABASE_URL, storage is unavailable: %s", e)
        return None, None
    return mongo_client, mongo_client[name]


client, db = connect(DATABASE_URL, DATABASE_NAME)


def get_db():
    return db


def _collection(collection_name: str):
    if db is None:
        raise StorageUnavailable("Database not configured")
    return db[collection_name]


def create_document(collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Insert one document and return it with its assigned `_id`.

    Pydantic models are dumped without None fields, so optional values that
    were not given are not stored at all.
    """
    if isinstance(data, BaseModel):
        doc = data.model_dump(exclude_none=True)
    else:
        doc = {k: v for k, v in data.items() if v is not None}
    try:
        result = _collection(collection_name).insert_one(doc)
    except PyMongoError as e:
        raise StorageUnavailable(str(e)) from e
    doc["_id"] = result.inserted_id
    return doc


def get_documents(
    collection_name: str,
    sort: Optional[Sequence[Tuple[str, int]]] = None,
) -> List[Dict[str, Any]]:
    cursor = _collection(collection_name).find()
    if sort:
        cursor = cursor.sort(list(sort))
    try:
        return list(cursor)
    except PyMongoError as e:
        raise StorageUnavailable(str(e)) from e


def ensure_indexes() -> None:
    # ListAll reads the mood collection ordered by date
    try:
        _collection("mood").create_index([("date", ASCENDING)])
    except PyMongoError as e:
        raise StorageUnavailable(str(e)) from e
