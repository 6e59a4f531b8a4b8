"""Notifications router — list, mark read, delete."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetto.database import get_db
from assetto.schemas.common import SuccessResponse
from assetto.schemas.notification import NotificationResponse
from assetto.services import notifications

router = APIRouter(prefix="/api", tags=["notifications"])


@router.get("/notifications", response_model=list[NotificationResponse])
def list_notifications(
    unread: bool = Query(False),
    db: Session = Depends(get_db),
):
    """List notifications, newest first."""
    return [NotificationResponse.model_validate(n) for n in notifications.list_notifications(db, unread_only=unread)]


@router.put("/notifications/{notification_id}/read", response_model=NotificationResponse)
def mark_read(notification_id: str, db: Session = Depends(get_db)):
    return NotificationResponse.model_validate(notifications.mark_read(db, notification_id))


@router.delete("/notifications/{notification_id}", response_model=SuccessResponse, response_model_exclude_none=True)
def delete_notification(notification_id: str, db: Session = Depends(get_db)):
    notifications.delete_notification(db, notification_id)
    return SuccessResponse()


@router.post("/test-notification", response_model=SuccessResponse)
def test_notification(db: Session = Depends(get_db)):
    """Create a sample notification (handy when wiring up a client)."""
    notifications.create_test_notification(db)
    return SuccessResponse(message="Notification created")
