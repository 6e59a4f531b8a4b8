"""Asset request/response schemas."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class AssetCreate(CamelModel):
    name: str
    type: Optional[str] = None
    assigned_to: Optional[str] = None
    status: Optional[str] = None
    purchase_date: Optional[datetime] = None


class AssetUpdate(CamelModel):
    name: Optional[str] = None
    type: Optional[str] = None
    assigned_to: Optional[str] = None
    status: Optional[str] = None
    purchase_date: Optional[datetime] = None


class AssetResponse(CamelModel):
    id: str
    name: str
    type: Optional[str]
    assigned_to: Optional[str]
    status: Optional[str]
    purchase_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
