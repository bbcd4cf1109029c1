from typing import Optional

from sqlmodel import Field

from app.models.base_model import BaseTable


class Shop(BaseTable, table=True):
    __tablename__ = "shops"

    name: str = Field(index=True, nullable=False)
    category: Optional[str] = Field(default=None, index=True)
    location: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    # pending until an admin approves it
    status: str = Field(default="pending", index=True, nullable=False)
