from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    category: Optional[str] = None
    location: Optional[str] = None
    starts_at: Optional[datetime] = None
    status: Literal["upcoming", "ongoing", "past"] = "upcoming"

    @field_validator("starts_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # clients may omit the offset; stored datetimes must be aware
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
