"""Recycle bin manager — list, restore, and permanently delete soft-deleted entities."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetto.config import settings
from assetto.errors import ConflictError, InvalidEntityTypeError, NotFoundError
from assetto.models.recycle_bin import RecycleBinEntry
from assetto.services import events
from assetto.services.entity_store import EntityKind, from_snapshot, get_kind, redact

logger = logging.getLogger(__name__)


def list_entries(db: Session) -> list[RecycleBinEntry]:
    """All bin entries, most recently deleted first."""
    return db.query(RecycleBinEntry).order_by(RecycleBinEntry.deleted_at.desc()).all()


def get_entry(db: Session, entry_id: str) -> RecycleBinEntry:
    entry = db.query(RecycleBinEntry).filter(RecycleBinEntry.id == entry_id).first()
    if not entry:
        raise NotFoundError("Recycle bin entry not found")
    return entry


def public_data(entry: RecycleBinEntry) -> dict:
    """Snapshot data safe to return to clients (password hashes removed)."""
    try:
        return redact(get_kind(entry.entity_type), entry.data or {})
    except InvalidEntityTypeError:
        return dict(entry.data or {})


def permanent_delete(db: Session, entry_id: str, actor: str = settings.DEFAULT_ACTOR) -> None:
    """Irreversibly remove one bin entry."""
    entry = get_entry(db, entry_id)
    entity_type = entry.entity_type
    db.delete(entry)
    db.commit()
    logger.info("Permanently deleted recycle bin entry %s (%s)", entry_id, entity_type)

    events.notify(db, "Item Permanently Deleted", f"{entity_type} removed from recycle bin.", "warning")
    events.log_activity(db, actor, "PURGE", entity_type, f"Recycle bin entry {entry_id} permanently deleted")


def restore(db: Session, entry_id: str, actor: str = settings.DEFAULT_ACTOR) -> tuple[EntityKind, object]:
    """Put a snapshot back into its original collection and drop the bin entry.

    The original id is reused unless a live row already holds it, in which
    case a fresh id is issued. Unique fields that clash with live rows raise
    ConflictError and the entry stays in the bin.
    """
    entry = get_entry(db, entry_id)
    kind = get_kind(entry.entity_type)
    item = from_snapshot(kind, entry.data or {})

    if not item.id or db.query(kind.model).filter(kind.model.id == item.id).first():
        original_id = item.id
        item.id = str(uuid.uuid4())
        logger.info("Id %s of %s is taken; restoring as %s", original_id, kind.display_name, item.id)

    for name in kind.unique_fields:
        value = getattr(item, name)
        if db.query(kind.model).filter(getattr(kind.model, name) == value).first():
            raise ConflictError(f"Cannot restore {kind.display_name}: {name} '{value}' is already taken")

    try:
        db.add(item)
        db.delete(entry)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Cannot restore {kind.display_name}: it conflicts with an existing record") from e
    db.refresh(item)
    item_id = item.id
    logger.info("Restored %s %s from recycle bin entry %s", kind.display_name, item_id, entry_id)

    events.notify(db, f"{kind.display_name} Restored", f"{kind.display_name} restored from recycle bin.", "success")
    events.log_activity(db, actor, "RESTORE", kind.display_name, f"{kind.display_name} {item_id} restored from recycle bin")
    return kind, item


def empty(db: Session, actor: str = settings.DEFAULT_ACTOR) -> int:
    """Remove every bin entry. Returns how many were deleted."""
    count = db.query(RecycleBinEntry).delete()
    db.commit()
    logger.info("Emptied recycle bin (%d entries)", count)

    events.notify(db, "Recycle Bin Emptied", f"{count} item(s) permanently deleted.", "warning")
    events.log_activity(db, actor, "PURGE", "RecycleBin", f"Recycle bin emptied ({count} entries)")
    return count
