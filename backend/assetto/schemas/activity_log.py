"""Activity log response schema."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class ActivityLogResponse(CamelModel):
    id: str
    user: str
    action: str
    entity: str
    details: Optional[str]
    created_at: datetime
