from typing import Literal, Optional
from pydantic import BaseModel, Field


ShopStatus = Literal["pending", "approved", "rejected"]


class ShopCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class ShopUpdate(BaseModel):
    """Partial update; only fields sent by the client are applied."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ShopStatus] = None
    rating_avg: Optional[float] = Field(default=None, ge=0, le=5)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    stock: int = Field(default=0, ge=0)
