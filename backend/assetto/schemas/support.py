"""Support ticket request/response schemas."""

from datetime import datetime
from typing import Optional

from assetto.schemas.common import CamelModel


class SupportTicketCreate(CamelModel):
    name: str
    email: Optional[str] = None
    subject: str
    message: str
    category: Optional[str] = None
    priority: Optional[str] = None


class SupportTicketUpdate(CamelModel):
    status: Optional[str] = None  # open | in-progress | resolved
    admin_reply: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None


class SupportReply(CamelModel):
    admin_reply: str


class SupportTicketResponse(CamelModel):
    id: str
    name: str
    email: Optional[str]
    subject: str
    message: str
    category: str
    priority: str
    status: str
    admin_reply: str
    created_at: datetime
    updated_at: datetime
