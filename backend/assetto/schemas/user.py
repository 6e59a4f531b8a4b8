"""User request/response schemas. The password hash never leaves the service."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class UserCreate(CamelModel):
    username: str
    email: Optional[str] = None
    role: Optional[str] = None
    password: str


class UserUpdate(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    id: str
    username: str
    email: Optional[str]
    role: str
    created_at: datetime
    updated_at: datetime
