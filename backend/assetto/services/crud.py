"""CRUD orchestrator — generic create/update/delete over any registered entity kind.

Every mutation emits one notification and one activity record. Deletes are
soft: the row is snapshotted into the recycle bin before it is removed.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from assetto.config import settings
from assetto.errors import ConflictError, InternalError, NotFoundError, ValidationError
from assetto.middleware.auth import hash_password
from assetto.models.recycle_bin import RecycleBinEntry
from assetto.services import events
from assetto.services.entity_store import EntityKind, snapshot

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_fields(kind: EntityKind, payload: dict, partial: bool) -> None:
    unknown = set(payload) - kind.writable_fields
    if unknown:
        raise ValidationError(f"Unknown field(s) for {kind.display_name}: {', '.join(sorted(unknown))}")

    columns = kind.columns
    for name, value in payload.items():
        column = columns.get(kind.secret_fields.get(name, name))
        if value is None and column is not None and not column.nullable:
            raise ValidationError(f"{name} cannot be null")

    for name in kind.required_fields:
        if partial and name not in payload:
            continue
        if _is_blank(payload.get(name)):
            raise ValidationError(f"{name} is required")


def _column_values(kind: EntityKind, payload: dict) -> dict:
    """Map payload fields to column values, hashing secret fields."""
    values = {}
    for name, value in payload.items():
        if name in kind.secret_fields:
            values[kind.secret_fields[name]] = hash_password(value)
        else:
            values[name] = value
    return values


def _check_unique(db: Session, kind: EntityKind, values: dict, exclude_id: Optional[str] = None) -> None:
    for name in kind.unique_fields:
        if name not in values:
            continue
        query = db.query(kind.model).filter(getattr(kind.model, name) == values[name])
        if exclude_id:
            query = query.filter(kind.model.id != exclude_id)
        if query.first():
            raise ConflictError(f"{kind.display_name} with {name} '{values[name]}' already exists")


def _commit(db: Session, kind: EntityKind) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"{kind.display_name} conflicts with an existing record") from e


def list_items(db: Session, kind: EntityKind) -> list:
    """All records of a kind, newest first."""
    return db.query(kind.model).order_by(kind.model.created_at.desc()).all()


def get_item(db: Session, kind: EntityKind, item_id: str):
    item = db.query(kind.model).filter(kind.model.id == item_id).first()
    if not item:
        raise NotFoundError(f"{kind.display_name} not found")
    return item


def create_item(db: Session, kind: EntityKind, payload: dict, actor: str = settings.DEFAULT_ACTOR):
    """Validate, persist, and announce a new record."""
    _check_fields(kind, payload, partial=False)
    values = _column_values(kind, payload)
    _check_unique(db, kind, values)

    item = kind.model(id=str(uuid.uuid4()), **values)
    db.add(item)
    _commit(db, kind)
    db.refresh(item)
    item_id = item.id
    logger.info("Created %s %s", kind.display_name, item_id)

    events.notify(db, f"{kind.display_name} Added", f"{kind.display_name} created successfully.", "success")
    events.log_activity(db, actor, "CREATE", kind.display_name, f"{kind.display_name} {item_id} created")
    return item


def update_item(db: Session, kind: EntityKind, item_id: str, payload: dict, actor: str = settings.DEFAULT_ACTOR):
    """Merge ``payload`` into an existing record and refresh its updated_at."""
    item = get_item(db, kind, item_id)
    _check_fields(kind, payload, partial=True)
    values = _column_values(kind, payload)
    _check_unique(db, kind, values, exclude_id=item_id)

    for name, value in values.items():
        setattr(item, name, value)
    item.updated_at = datetime.now(timezone.utc)
    _commit(db, kind)
    db.refresh(item)
    logger.info("Updated %s %s (%s)", kind.display_name, item_id, ", ".join(sorted(payload)) or "no fields")

    events.notify(db, f"{kind.display_name} Updated", f"{kind.display_name} updated successfully.", "info")
    events.log_activity(db, actor, "UPDATE", kind.display_name, f"{kind.display_name} {item_id} updated")
    return item


def delete_item(db: Session, kind: EntityKind, item_id: str, actor: str = settings.DEFAULT_ACTOR) -> RecycleBinEntry:
    """Move a record into the recycle bin.

    The snapshot is flushed before the row is deleted and both commit
    together, so a failure at either step leaves the record where it was.
    """
    item = get_item(db, kind, item_id)

    entry = RecycleBinEntry(
        id=str(uuid.uuid4()),
        entity_type=kind.display_name,
        data=snapshot(item),
        deleted_at=datetime.now(timezone.utc),
    )
    try:
        db.add(entry)
        db.flush()
        db.delete(item)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to move %s %s to the recycle bin", kind.display_name, item_id)
        raise InternalError(f"Failed to delete {kind.display_name}") from e
    db.refresh(entry)
    logger.info("Moved %s %s to recycle bin entry %s", kind.display_name, item_id, entry.id)

    events.notify(db, f"{kind.display_name} Deleted", f"{kind.display_name} moved to recycle bin.", "warning")
    events.log_activity(
        db, actor, "DELETE", kind.display_name,
        f"{kind.display_name} {item_id} deleted and moved to recycle bin",
    )
    return entry
