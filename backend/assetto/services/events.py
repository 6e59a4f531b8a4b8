"""Notification and activity emission.

Both are best-effort side records: they are written after the primary
mutation has committed, and a store failure is logged and swallowed so it
can never fail or roll back the operation that triggered it.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assetto.config import settings
from assetto.models.notification import Notification
from assetto.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = ("info", "success", "warning", "error")
ACTIVITY_ACTIONS = ("CREATE", "UPDATE", "DELETE", "LOGIN", "REGISTER", "RESTORE", "PURGE")


def notify(db: Session, title: str, message: str, level: str = "info") -> bool:
    """Write a notification. Returns False if the write failed."""
    if level not in NOTIFICATION_TYPES:
        level = "info"
    try:
        db.add(Notification(title=title, message=message, type=level))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to write notification %r", title)
        return False
    return True


def log_activity(
    db: Session,
    user: str,
    action: str,
    entity: str,
    details: str = "",
) -> bool:
    """Append an activity log record. Returns False if the write failed."""
    try:
        db.add(ActivityLog(
            user=user or settings.DEFAULT_ACTOR,
            action=action,
            entity=entity,
            details=details,
        ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to write activity log %s %s", action, entity)
        return False
    return True
