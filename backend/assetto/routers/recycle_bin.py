"""Recycle bin router — list, restore, permanent delete, and empty."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from assetto.database import get_db
from assetto.middleware.auth import get_actor
from assetto.models.recycle_bin import RecycleBinEntry
from assetto.routers.entities import to_response
from assetto.schemas.common import SuccessResponse
from assetto.schemas.recycle_bin import EmptyBinResponse, RecycleBinEntryResponse, RestoreResponse
from assetto.services import recycle_bin

router = APIRouter(prefix="/api", tags=["recycle-bin"])


def _entry_to_response(entry: RecycleBinEntry) -> RecycleBinEntryResponse:
    return RecycleBinEntryResponse(
        id=entry.id,
        entity_type=entry.entity_type,
        data=recycle_bin.public_data(entry),
        deleted_at=entry.deleted_at,
    )


@router.get("/recycle-bin", response_model=list[RecycleBinEntryResponse])
def list_bin(db: Session = Depends(get_db)):
    """List soft-deleted items, most recent first."""
    return [_entry_to_response(e) for e in recycle_bin.list_entries(db)]


# Older clients call the un-hyphenated path
@router.get("/recyclebin", response_model=list[RecycleBinEntryResponse], include_in_schema=False)
def list_bin_legacy(db: Session = Depends(get_db)):
    return list_bin(db)


@router.post("/recycle-bin/{entry_id}/restore", response_model=RestoreResponse)
def restore_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    """Move an entry back into its original collection."""
    kind, item = recycle_bin.restore(db, entry_id, actor)
    return RestoreResponse(entity_type=kind.display_name, item=to_response(kind, item))


@router.delete("/recycle-bin/{entry_id}", response_model=SuccessResponse, response_model_exclude_none=True)
def delete_entry(
    entry_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    """Permanently delete one entry."""
    recycle_bin.permanent_delete(db, entry_id, actor)
    return SuccessResponse()


@router.delete("/recycle-bin", response_model=EmptyBinResponse)
def empty_bin(
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    """Permanently delete every entry."""
    deleted = recycle_bin.empty(db, actor)
    return EmptyBinResponse(message="Recycle bin emptied", deleted=deleted)
