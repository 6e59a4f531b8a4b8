"""Recycle bin response schemas."""

from datetime import datetime
from typing import Any

from assetto.schemas.common import CamelModel


class RecycleBinEntryResponse(CamelModel):
    id: str
    entity_type: str
    data: dict[str, Any]
    deleted_at: datetime


class EmptyBinResponse(CamelModel):
    success: bool = True
    message: str
    deleted: int


class RestoreResponse(CamelModel):
    success: bool = True
    entity_type: str
    item: dict[str, Any]
