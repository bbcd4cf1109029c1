from typing import Optional

from sqlmodel import Field

from app.models.base_model import BaseTable


class Product(BaseTable, table=True):
    __tablename__ = "products"

    shop_id: int = Field(foreign_key="shops.id", index=True, nullable=False)
    name: str = Field(index=True, nullable=False)
    description: Optional[str] = Field(default=None)
    price: float = Field(default=0.0, nullable=False)
    stock: int = Field(default=0, nullable=False)
    # soft delete, rows stay for order history
    is_deleted: bool = Field(default=False, nullable=False)
