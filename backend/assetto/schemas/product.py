"""Product request/response schemas."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class ProductCreate(CamelModel):
    name: str
    category: Optional[str] = None
    price: Optional[float] = None
    vendor: Optional[str] = None
    quantity: Optional[int] = None


class ProductUpdate(CamelModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    vendor: Optional[str] = None
    quantity: Optional[int] = None


class ProductResponse(CamelModel):
    id: str
    name: str
    category: Optional[str]
    price: Optional[float]
    vendor: Optional[str]
    quantity: Optional[int]
    created_at: datetime
    updated_at: datetime
