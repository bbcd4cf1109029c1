from typing import Optional
from datetime import datetime

from sqlmodel import Field

from app.models.base_model import BaseTable


class Event(BaseTable, table=True):
    __tablename__ = "events"

    title: str = Field(index=True, nullable=False)
    category: Optional[str] = Field(default=None)
    location: Optional[str] = Field(default=None)
    starts_at: Optional[datetime] = Field(default=None)
    status: str = Field(default="upcoming", index=True, nullable=False)
