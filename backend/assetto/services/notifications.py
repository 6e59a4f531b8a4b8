"""Notification service — listing and read/delete of notification records."""

from sqlalchemy.orm import Session

from assetto.errors import NotFoundError
from assetto.models.notification import Notification


def list_notifications(db: Session, unread_only: bool = False) -> list[Notification]:
    query = db.query(Notification)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    return query.order_by(Notification.created_at.desc()).all()


def get_notification(db: Session, notification_id: str) -> Notification:
    note = db.query(Notification).filter(Notification.id == notification_id).first()
    if not note:
        raise NotFoundError("Notification not found")
    return note


def mark_read(db: Session, notification_id: str) -> Notification:
    """Flip is_read to True. The only mutation a notification ever sees."""
    note = get_notification(db, notification_id)
    note.is_read = True
    db.commit()
    db.refresh(note)
    return note


def delete_notification(db: Session, notification_id: str) -> None:
    note = get_notification(db, notification_id)
    db.delete(note)
    db.commit()


def create_test_notification(db: Session) -> Notification:
    note = Notification(
        title="Test Notification",
        message="This is a sample notification from the server.",
        type="info",
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    return note
