"""Entity kinds and the snapshot format used by the recycle bin.

Each collection (vendors, products, assets, users) is described once by an
EntityKind and registered in ``REGISTRY``; the CRUD orchestrator and the
recycle bin work off that descriptor instead of per-kind code.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from pydantic.alias_generators import to_camel
from sqlalchemy import DateTime

from assetto.errors import InvalidEntityTypeError
from assetto.models.vendor import Vendor
from assetto.models.product import Product
from assetto.models.asset import Asset
from assetto.models.user import User

# Managed by the store, never taken from a payload
SYSTEM_COLUMNS = ("id", "created_at", "updated_at")


@dataclass(frozen=True)
class EntityKind:
    name: str  # collection name used in URLs, e.g. "vendors"
    display_name: str  # recorded as entityType in the recycle bin, e.g. "Vendor"
    model: type
    required_fields: tuple = ("name",)
    unique_fields: tuple = ()
    # payload field -> column holding its bcrypt hash
    secret_fields: dict = field(default_factory=dict)

    @property
    def columns(self) -> dict:
        return {c.key: c for c in self.model.__table__.columns}

    @property
    def secret_columns(self) -> set:
        return set(self.secret_fields.values())

    @property
    def writable_fields(self) -> set:
        fields = set(self.columns) - set(SYSTEM_COLUMNS) - self.secret_columns
        return fields | set(self.secret_fields)


REGISTRY: dict[str, EntityKind] = {}


def register(kind: EntityKind) -> EntityKind:
    REGISTRY[kind.name] = kind
    return kind


VENDORS = register(EntityKind("vendors", "Vendor", Vendor))
PRODUCTS = register(EntityKind("products", "Product", Product))
ASSETS = register(EntityKind("assets", "Asset", Asset))
USERS = register(EntityKind(
    "users",
    "User",
    User,
    required_fields=("username", "password"),
    unique_fields=("username",),
    secret_fields={"password": "password_hash"},
))


def get_kind(name: str) -> EntityKind:
    """Resolve a collection name ("vendors") or display name ("Vendor")."""
    key = (name or "").strip().lower()
    for kind in REGISTRY.values():
        if key in (kind.name, kind.display_name.lower()):
            return kind
    raise InvalidEntityTypeError(f"Unknown entity type '{name}'")


def snapshot(record) -> dict:
    """Every column of ``record`` as a JSON-safe dict with camelCase keys."""
    data = {}
    for column in record.__table__.columns:
        value = getattr(record, column.key)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        data[to_camel(column.key)] = value
    return data


def from_snapshot(kind: EntityKind, data: dict):
    """Build an unsaved ``kind.model`` instance from a snapshot. Unknown keys are ignored."""
    by_key = {to_camel(key): column for key, column in kind.columns.items()}
    values = {}
    for key, value in data.items():
        column = by_key.get(key)
        if column is None:
            continue
        if isinstance(value, str) and isinstance(column.type, DateTime):
            value = datetime.fromisoformat(value)
        values[column.key] = value
    return kind.model(**values)


def redact(kind: EntityKind, data: dict) -> dict:
    """Copy of a snapshot without its secret columns."""
    hidden = {to_camel(c) for c in kind.secret_columns}
    return {k: v for k, v in data.items() if k not in hidden}
