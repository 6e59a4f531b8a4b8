"""Recycle bin model — snapshots of soft-deleted entities."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, JSON

from assetto.database import Base


class RecycleBinEntry(Base):
    __tablename__ = "recycle_bin"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    entity_type = Column(String(50), nullable=False, index=True)  # Vendor | Product | Asset | User
    data = Column(JSON, nullable=False)  # every column of the deleted row
    deleted_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
