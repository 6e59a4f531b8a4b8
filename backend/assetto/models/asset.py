"""Asset model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from assetto.database import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=True)
    assigned_to = Column(String(255), nullable=True)
    status = Column(String(50), nullable=True)  # free text, e.g. active | in-repair | retired
    purchase_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
