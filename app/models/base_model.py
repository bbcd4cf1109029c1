from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Timezone-aware now; naive datetimes are rejected on insert."""
    return datetime.now(timezone.utc)


class BaseTable(SQLModel):
    """Columns every listable table shares; the sortable ones back SORT_FIELDS."""
    id: Optional[int] = Field(default=None, primary_key=True, index=True)
    rating_avg: float = Field(default=0.0, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
