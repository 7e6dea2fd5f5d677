import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, field_validator

from database import (
    DATABASE_NAME,
    DATABASE_URL,
    StorageUnavailable,
    create_document,
    ensure_indexes,
    get_db,
    get_documents,
)
from schemas import Mood

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await run_in_threadpool(ensure_indexes)
    except StorageUnavailable as e:
        logger.warning("[startup] could not ensure indexes: %s", e)
    yield


app = FastAPI(title="Mood Journal API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CreateMood(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    mood: Optional[str] = None
    note: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("mood", "note", mode="before")
    @classmethod
    def stringify_bools(cls, v):
        # true/false are stored as text, like numbers
        if isinstance(v, bool):
            return "true" if v else "false"
        return v


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error("[db] %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


def serialize_entry(doc: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": str(doc["_id"])}
    for key in ("mood", "note"):
        if key in doc:
            out[key] = doc[key]
    when = doc.get("date")
    # pymongo hands back naive UTC datetimes
    if isinstance(when, datetime) and when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    out["date"] = when
    return out


@app.get("/")
def read_root():
    return {"message": "Mood Journal Backend Running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": "✅ Set" if DATABASE_URL else "❌ Not Set",
        "database_name": DATABASE_NAME,
        "connection_status": "Not Connected",
        "collections": [],
    }
    db = get_db()
    if db is None:
        return response
    try:
        response["collections"] = db.list_collection_names()
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except Exception as e:
        response["database"] = f"⚠️ Connected but Error: {str(e)[:50]}"
    return response


# ---------- Moods ----------
@app.post("/mood", status_code=201)
def create_mood(payload: CreateMood):
    entry = Mood(**payload.model_dump(exclude_none=True))
    doc = create_document("mood", entry)
    logger.info("[mood] created id=%s mood=%r", doc["_id"], doc.get("mood"))
    return serialize_entry(doc)


@app.get("/mood")
def list_moods():
    items = get_documents("mood", sort=[("date", 1), ("_id", 1)])
    return [serialize_entry(it) for it in items]


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
