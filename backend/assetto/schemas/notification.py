"""Notification response schema."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    id: str
    title: str
    message: Optional[str]
    type: str
    is_read: bool
    created_at: datetime
