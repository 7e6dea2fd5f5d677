"""
Database Schemas for the Mood Journal

Each Pydantic model below represents a MongoDB collection. The collection
name is the lowercase of the class name (e.g., Mood -> "mood").
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Mood(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    mood: Optional[str] = Field(None, description="Mood label, free-form (e.g. Happy, Sad, Neutral)")
    note: Optional[str] = Field(None, description="Optional free-form note")
    date: datetime = Field(default_factory=utcnow, validate_default=True, description="When the mood was recorded (UTC)")

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        # Naive timestamps are UTC; BSON datetimes only keep milliseconds
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        else:
            v = v.astimezone(timezone.utc)
        return v.replace(microsecond=(v.microsecond // 1000) * 1000)
