"""SQLAlchemy ORM models."""

from assetto.models.vendor import Vendor
from assetto.models.product import Product
from assetto.models.asset import Asset
from assetto.models.user import User
from assetto.models.recycle_bin import RecycleBinEntry
from assetto.models.notification import Notification
from assetto.models.activity_log import ActivityLog
from assetto.models.support_ticket import SupportTicket

__all__ = [
    "Vendor",
    "Product",
    "Asset",
    "User",
    "RecycleBinEntry",
    "Notification",
    "ActivityLog",
    "SupportTicket",
]
