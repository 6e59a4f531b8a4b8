"""Activity log router — read-only audit trail."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetto.database import get_db
from assetto.schemas.activity_log import ActivityLogResponse
from assetto.services import activity

router = APIRouter(prefix="/api", tags=["activity"])


@router.get("/activity", response_model=list[ActivityLogResponse])
def list_activity(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    action: Optional[str] = Query(None),
    entity: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List activity records, newest first."""
    logs = activity.list_activity(db, limit=limit, action=action, entity=entity)
    return [ActivityLogResponse.model_validate(a) for a in logs]
