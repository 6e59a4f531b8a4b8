"""Vendor request/response schemas."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class VendorCreate(CamelModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    logo: Optional[str] = None


class VendorUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    logo: Optional[str] = None


class VendorResponse(CamelModel):
    id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    company: Optional[str]
    logo: Optional[str]
    created_at: datetime
    updated_at: datetime
