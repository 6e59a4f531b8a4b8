"""Support router — ticket submission and admin workflow."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetto.database import get_db
from assetto.middleware.auth import get_actor
from assetto.schemas.common import SuccessResponse
from assetto.schemas.support import (
    SupportReply,
    SupportTicketCreate,
    SupportTicketResponse,
    SupportTicketUpdate,
)
from assetto.services import support

router = APIRouter(prefix="/api/support", tags=["support"])


@router.get("", response_model=list[SupportTicketResponse])
def list_tickets(
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """List tickets, newest first."""
    return [SupportTicketResponse.model_validate(t) for t in support.list_tickets(db, status=status)]


@router.post("", response_model=SupportTicketResponse)
def create_ticket(req: SupportTicketCreate, db: Session = Depends(get_db)):
    """Submit a ticket. It always starts as 'open'."""
    ticket = support.create_ticket(db, req.model_dump(exclude_unset=True))
    return SupportTicketResponse.model_validate(ticket)


@router.get("/{ticket_id}", response_model=SupportTicketResponse)
def get_ticket(ticket_id: str, db: Session = Depends(get_db)):
    return SupportTicketResponse.model_validate(support.get_ticket(db, ticket_id))


@router.put("/{ticket_id}", response_model=SupportTicketResponse)
def update_ticket(
    ticket_id: str,
    req: SupportTicketUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    """Change status, reply, category or priority."""
    ticket = support.update_ticket(db, ticket_id, req.model_dump(exclude_unset=True), actor)
    return SupportTicketResponse.model_validate(ticket)


@router.post("/{ticket_id}/in-progress", response_model=SupportTicketResponse)
def mark_in_progress(
    ticket_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    return SupportTicketResponse.model_validate(support.mark_in_progress(db, ticket_id, actor))


@router.post("/{ticket_id}/resolve", response_model=SupportTicketResponse)
def mark_resolved(
    ticket_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    return SupportTicketResponse.model_validate(support.mark_resolved(db, ticket_id, actor))


@router.post("/{ticket_id}/reply", response_model=SupportTicketResponse)
def reply(
    ticket_id: str,
    req: SupportReply,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    """Attach an admin reply; an open ticket moves to in-progress."""
    return SupportTicketResponse.model_validate(support.reply(db, ticket_id, req.admin_reply, actor))


@router.delete("/{ticket_id}", response_model=SuccessResponse, response_model_exclude_none=True)
def delete_ticket(
    ticket_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    support.delete_ticket(db, ticket_id, actor)
    return SuccessResponse()
