"""Tests for the CRUD orchestrator (service level, in-memory database)."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from conftest import count
from assetto.errors import ConflictError, InternalError, NotFoundError, ValidationError
from assetto.middleware.auth import hash_password, verify_password
from assetto.models.activity_log import ActivityLog
from assetto.models.notification import Notification
from assetto.models.recycle_bin import RecycleBinEntry
from assetto.models.user import User
from assetto.models.vendor import Vendor
from assetto.services import crud, events
from assetto.services.entity_store import PRODUCTS, USERS, VENDORS


class TestCreate:
    """Creating records."""

    def test_create_persists_with_generated_id(self, db):
        """A new vendor gets an id and a creation timestamp."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme", "email": "sales@acme.test"})

        assert vendor.id
        stored = crud.get_item(db, VENDORS, vendor.id)
        assert stored.name == "Acme"
        assert stored.email == "sales@acme.test"
        assert stored.created_at is not None

    def test_missing_name_is_rejected(self, db):
        """Name is required and nothing is written without it."""
        with pytest.raises(ValidationError):
            crud.create_item(db, VENDORS, {"email": "x@y.test"})
        assert count(db, Vendor) == 0

    def test_blank_name_is_rejected(self, db):
        """Whitespace does not count as a name."""
        with pytest.raises(ValidationError):
            crud.create_item(db, PRODUCTS, {"name": "   "})

    def test_unknown_field_is_rejected(self, db):
        """Fields outside the model are refused."""
        with pytest.raises(ValidationError):
            crud.create_item(db, VENDORS, {"name": "Acme", "colour": "red"})

    def test_null_for_non_nullable_column_is_rejected(self, db):
        """An explicit null role is a validation error, not a database error."""
        with pytest.raises(ValidationError, match="role cannot be null"):
            crud.create_item(db, USERS, {"username": "bob", "password": "pw", "role": None})
        assert count(db, User) == 0

    def test_user_password_is_hashed(self, db):
        """Only the bcrypt hash is stored."""
        user = crud.create_item(db, USERS, {"username": "bob", "password": "pw"})

        assert user.password_hash != "pw"
        assert verify_password("pw", user.password_hash)

    def test_overlong_password_is_rejected(self, db):
        """Passwords past bcrypt's 72-byte limit are a validation error."""
        with pytest.raises(ValidationError):
            crud.create_item(db, USERS, {"username": "bob", "password": "x" * 100})
        assert count(db, User) == 0

    def test_duplicate_username_conflicts(self, db):
        """Usernames are unique."""
        crud.create_item(db, USERS, {"username": "bob", "password": "pw"})
        with pytest.raises(ConflictError):
            crud.create_item(db, USERS, {"username": "bob", "password": "other"})

    def test_integrity_error_at_commit_is_a_conflict(self, db, monkeypatch):
        """A constraint the pre-checks miss still surfaces as ConflictError."""
        crud.create_item(db, USERS, {"username": "bob", "password": "pw"})
        monkeypatch.setattr(crud, "_check_unique", lambda *args, **kwargs: None)

        with pytest.raises(ConflictError, match="conflicts with an existing record"):
            crud.create_item(db, USERS, {"username": "bob", "password": "other"})
        assert count(db, User) == 1

    def test_create_emits_success_notification_and_activity(self, db):
        """One notification and one activity record per create."""
        crud.create_item(db, VENDORS, {"name": "Acme"}, actor="ana")

        notes = db.query(Notification).all()
        logs = db.query(ActivityLog).all()
        assert [(n.title, n.type) for n in notes] == [("Vendor Added", "success")]
        assert [(a.action, a.entity, a.user) for a in logs] == [("CREATE", "Vendor", "ana")]


class TestHashPassword:
    """bcrypt input limits."""

    def test_72_bytes_is_accepted(self):
        """The longest password bcrypt reads in full still hashes."""
        assert verify_password("x" * 72, hash_password("x" * 72))

    def test_73_bytes_is_rejected(self):
        """One byte over the limit raises ValidationError."""
        with pytest.raises(ValidationError):
            hash_password("x" * 73)

    def test_multibyte_characters_count_as_bytes(self):
        """The limit is on UTF-8 bytes, not characters."""
        with pytest.raises(ValidationError):
            hash_password("é" * 40)


class TestUpdate:
    """Updating records."""

    def test_update_merges_fields(self, db):
        """Fields not in the payload are left alone."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme", "phone": "123"})
        updated = crud.update_item(db, VENDORS, vendor.id, {"company": "Acme Ltd"})

        assert updated.name == "Acme"
        assert updated.phone == "123"
        assert updated.company == "Acme Ltd"

    def test_update_refreshes_updated_at(self, db):
        """updated_at moves forward on every update."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        before = vendor.updated_at
        updated = crud.update_item(db, VENDORS, vendor.id, {"name": "Acme 2"})
        assert updated.updated_at >= before

    def test_update_missing_id_raises_not_found(self, db):
        """Updating an unknown id is NotFoundError."""
        with pytest.raises(NotFoundError):
            crud.update_item(db, VENDORS, "does-not-exist", {"name": "x"})

    def test_update_cannot_blank_required_field(self, db):
        """A required field cannot be emptied."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        with pytest.raises(ValidationError):
            crud.update_item(db, VENDORS, vendor.id, {"name": ""})

    def test_update_cannot_null_non_nullable_column(self, db):
        """Setting role to null is rejected and the stored role is kept."""
        user = crud.create_item(db, USERS, {"username": "bob", "password": "pw"})
        with pytest.raises(ValidationError, match="role cannot be null"):
            crud.update_item(db, USERS, user.id, {"role": None})
        assert crud.get_item(db, USERS, user.id).role == "user"

    def test_update_can_null_optional_column(self, db):
        """Nullable columns may be cleared."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme", "phone": "123"})
        updated = crud.update_item(db, VENDORS, vendor.id, {"phone": None})
        assert updated.phone is None

    def test_update_rehashes_password(self, db):
        """A new password replaces the old hash."""
        user = crud.create_item(db, USERS, {"username": "bob", "password": "pw"})
        updated = crud.update_item(db, USERS, user.id, {"password": "new-pw"})

        assert verify_password("new-pw", updated.password_hash)
        assert not verify_password("pw", updated.password_hash)

    def test_update_to_taken_username_conflicts(self, db):
        """Renaming onto an existing username is a conflict."""
        crud.create_item(db, USERS, {"username": "bob", "password": "pw"})
        ana = crud.create_item(db, USERS, {"username": "ana", "password": "pw"})
        with pytest.raises(ConflictError):
            crud.update_item(db, USERS, ana.id, {"username": "bob"})

    def test_update_emits_info_notification(self, db):
        """Updates notify at info level and log UPDATE."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        crud.update_item(db, VENDORS, vendor.id, {"name": "Acme 2"})

        note = db.query(Notification).filter(Notification.title == "Vendor Updated").one()
        assert note.type == "info"
        assert db.query(ActivityLog).filter(ActivityLog.action == "UPDATE").count() == 1


class TestDelete:
    """Soft delete into the recycle bin."""

    def test_delete_moves_record_to_bin(self, db):
        """The row is gone and its snapshot is in the bin."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme", "email": "a@acme.test"})
        vendor_id = vendor.id

        entry = crud.delete_item(db, VENDORS, vendor_id)

        assert count(db, Vendor) == 0
        assert count(db, RecycleBinEntry) == 1
        assert entry.entity_type == "Vendor"
        assert entry.data["id"] == vendor_id
        assert entry.data["name"] == "Acme"
        assert entry.data["email"] == "a@acme.test"

    def test_delete_missing_id_creates_no_bin_entry(self, db):
        """A missing id writes nothing to the bin."""
        with pytest.raises(NotFoundError):
            crud.delete_item(db, VENDORS, "does-not-exist")
        assert count(db, RecycleBinEntry) == 0

    def test_delete_twice_is_not_found_the_second_time(self, db):
        """The second delete of the same id is NotFoundError."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        vendor_id = vendor.id
        crud.delete_item(db, VENDORS, vendor_id)

        with pytest.raises(NotFoundError):
            crud.delete_item(db, VENDORS, vendor_id)
        assert count(db, RecycleBinEntry) == 1

    def test_delete_emits_warning_notification(self, db):
        """Deletes notify at warning level and log DELETE."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        crud.delete_item(db, VENDORS, vendor.id, actor="ana")

        note = db.query(Notification).filter(Notification.title == "Vendor Deleted").one()
        assert note.type == "warning"
        log = db.query(ActivityLog).filter(ActivityLog.action == "DELETE").one()
        assert log.user == "ana"
        assert "recycle bin" in log.details

    def test_failed_commit_keeps_record_and_writes_no_entry(self, db, monkeypatch):
        """If the commit fails, the flushed bin entry is rolled back with the delete."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        vendor_id = vendor.id

        def broken_commit():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(db, "commit", broken_commit)
        with pytest.raises(InternalError):
            crud.delete_item(db, VENDORS, vendor_id)
        monkeypatch.undo()

        assert count(db, Vendor) == 1
        assert count(db, RecycleBinEntry) == 0

    def test_failed_row_delete_writes_no_entry(self, db, monkeypatch):
        """If removing the row fails, no bin entry survives."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        vendor_id = vendor.id

        def broken_delete(instance):
            raise SQLAlchemyError("row locked")

        monkeypatch.setattr(db, "delete", broken_delete)
        with pytest.raises(InternalError):
            crud.delete_item(db, VENDORS, vendor_id)
        monkeypatch.undo()

        assert count(db, Vendor) == 1
        assert count(db, RecycleBinEntry) == 0
        assert db.query(Notification).filter(Notification.title == "Vendor Deleted").count() == 0


class TestSideEffectFailures:
    """Notification and activity writes never fail the main operation."""

    def test_failed_notification_does_not_fail_create(self, db, monkeypatch):
        """Create succeeds and still logs activity when notifying fails."""
        attempts = []

        def broken_notification(**kwargs):
            attempts.append(kwargs["title"])
            raise SQLAlchemyError("notifications table unavailable")

        monkeypatch.setattr(events, "Notification", broken_notification)

        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})

        assert attempts == ["Vendor Added"]
        assert count(db, Vendor) == 1
        assert crud.get_item(db, VENDORS, vendor.id).name == "Acme"
        # The activity record is still written
        assert count(db, ActivityLog) == 1

    def test_failed_activity_log_does_not_fail_delete(self, db, monkeypatch):
        """Delete completes when the activity log write fails."""
        vendor = crud.create_item(db, VENDORS, {"name": "Acme"})
        vendor_id = vendor.id

        def broken_activity(**kwargs):
            raise SQLAlchemyError("activity table unavailable")

        monkeypatch.setattr(events, "ActivityLog", broken_activity)

        crud.delete_item(db, VENDORS, vendor_id)

        assert count(db, Vendor) == 0
        assert count(db, RecycleBinEntry) == 1

    def test_notify_reports_failure(self, db, monkeypatch):
        """notify returns False instead of raising."""
        def broken_notification(**kwargs):
            raise SQLAlchemyError("boom")

        monkeypatch.setattr(events, "Notification", broken_notification)
        assert events.notify(db, "t", "m") is False
