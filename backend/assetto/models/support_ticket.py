"""Support ticket model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text

from assetto.database import Base


class SupportTicket(Base):
    __tablename__ = "support_tickets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    subject = Column(String(500), nullable=False)
    message = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default="General")
    priority = Column(String(20), nullable=False, default="Medium")  # Low | Medium | High
    status = Column(String(20), nullable=False, default="open")  # open | in-progress | resolved
    admin_reply = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
