"""Support service — ticket submission and the admin-driven status workflow.

Tickets move forward only: open -> in-progress -> resolved (open may also
jump straight to resolved). Resolved is terminal.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from assetto.config import settings
from assetto.errors import NotFoundError, ValidationError
from assetto.models.support_ticket import SupportTicket
from assetto.services import events

logger = logging.getLogger(__name__)

STATUSES = ("open", "in-progress", "resolved")
TRANSITIONS = {
    "open": ("in-progress", "resolved"),
    "in-progress": ("resolved",),
    "resolved": (),
}
UPDATABLE_FIELDS = ("status", "admin_reply", "category", "priority")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _next_status(current: str, requested: str) -> str:
    if requested not in STATUSES:
        raise ValidationError(f"Invalid status '{requested}'. Must be one of: {', '.join(STATUSES)}")
    if requested == current:
        return current
    if requested not in TRANSITIONS.get(current, ()):
        raise ValidationError(f"Cannot move ticket from '{current}' to '{requested}'")
    return requested


def list_tickets(db: Session, status: Optional[str] = None) -> list[SupportTicket]:
    query = db.query(SupportTicket)
    if status:
        query = query.filter(SupportTicket.status == status)
    return query.order_by(SupportTicket.created_at.desc()).all()


def get_ticket(db: Session, ticket_id: str) -> SupportTicket:
    ticket = db.query(SupportTicket).filter(SupportTicket.id == ticket_id).first()
    if not ticket:
        raise NotFoundError("Ticket not found")
    return ticket


def create_ticket(db: Session, payload: dict) -> SupportTicket:
    """Open a new ticket. Status always starts at 'open'."""
    for name in ("name", "subject", "message"):
        if _is_blank(payload.get(name)):
            raise ValidationError(f"{name} is required")

    ticket = SupportTicket(
        id=str(uuid.uuid4()),
        name=payload["name"],
        email=payload.get("email"),
        subject=payload["subject"],
        message=payload["message"],
        category=payload.get("category") or "General",
        priority=payload.get("priority") or "Medium",
        status="open",
        admin_reply="",
    )
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    ticket_id, subject, submitter = ticket.id, ticket.subject, ticket.name
    logger.info("Support ticket %s opened", ticket_id)

    events.notify(db, "New Support Ticket", f"Ticket: {subject}", "info")
    events.log_activity(db, submitter or "User", "CREATE", "Support", f"Ticket created: {subject}")
    return ticket


def update_ticket(
    db: Session,
    ticket_id: str,
    payload: dict,
    actor: str = settings.DEFAULT_ACTOR,
) -> SupportTicket:
    """Apply an admin update: status change, reply, category or priority.

    A reply on an open ticket moves it to in-progress.
    """
    ticket = get_ticket(db, ticket_id)
    unknown = set(payload) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown field(s) for ticket: {', '.join(sorted(unknown))}")

    was_resolved = ticket.status == "resolved"
    status = ticket.status
    if payload.get("status") is not None:
        status = _next_status(ticket.status, payload["status"])

    reply = payload.get("admin_reply")
    replied = not _is_blank(reply)
    if reply is not None:
        ticket.admin_reply = reply
    if replied and status == "open":
        status = "in-progress"

    for name in ("category", "priority"):
        if not _is_blank(payload.get(name)):
            setattr(ticket, name, payload[name])

    ticket.status = status
    ticket.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(ticket)
    subject = ticket.subject
    logger.info("Support ticket %s updated (status=%s)", ticket_id, status)

    if status == "resolved" and not was_resolved:
        events.notify(db, "Ticket Resolved", f"Resolved: {subject}", "success")
    if replied:
        events.notify(db, "Support Reply", f"Reply to: {subject}", "info")
    events.log_activity(db, actor, "UPDATE", "Support", f"Updated ticket {ticket_id}")
    return ticket


def mark_in_progress(db: Session, ticket_id: str, actor: str = settings.DEFAULT_ACTOR) -> SupportTicket:
    return update_ticket(db, ticket_id, {"status": "in-progress"}, actor)


def mark_resolved(db: Session, ticket_id: str, actor: str = settings.DEFAULT_ACTOR) -> SupportTicket:
    return update_ticket(db, ticket_id, {"status": "resolved"}, actor)


def reply(db: Session, ticket_id: str, text: str, actor: str = settings.DEFAULT_ACTOR) -> SupportTicket:
    if _is_blank(text):
        raise ValidationError("adminReply is required")
    return update_ticket(db, ticket_id, {"admin_reply": text}, actor)


def delete_ticket(db: Session, ticket_id: str, actor: str = settings.DEFAULT_ACTOR) -> None:
    """Hard delete; tickets do not go through the recycle bin."""
    ticket = get_ticket(db, ticket_id)
    db.delete(ticket)
    db.commit()
    logger.info("Support ticket %s deleted", ticket_id)

    events.log_activity(db, actor, "DELETE", "Support", f"Deleted ticket {ticket_id}")
