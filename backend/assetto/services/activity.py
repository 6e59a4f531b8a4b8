"""Activity log queries. Records are written only through events.log_activity."""

from typing import Optional

from sqlalchemy.orm import Session

from assetto.models.activity_log import ActivityLog


def list_activity(
    db: Session,
    limit: Optional[int] = None,
    action: Optional[str] = None,
    entity: Optional[str] = None,
) -> list[ActivityLog]:
    """Activity records, newest first, with optional filters."""
    query = db.query(ActivityLog)
    if action:
        query = query.filter(ActivityLog.action == action.upper())
    if entity:
        query = query.filter(ActivityLog.entity == entity)
    query = query.order_by(ActivityLog.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()
