"""Activity log model — immutable record of every state-changing action."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text

from assetto.database import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user = Column(String(150), nullable=False, default="System")
    action = Column(String(20), nullable=False)  # CREATE | UPDATE | DELETE | LOGIN | REGISTER | RESTORE | PURGE
    entity = Column(String(50), nullable=False)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
