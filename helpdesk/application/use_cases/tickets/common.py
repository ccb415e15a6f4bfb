"""Helpers shared by the ticket use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from helpdesk.application.notifications import RecipientContext
from helpdesk.domain.entities import Ticket
from helpdesk.domain.exceptions import TicketNotFoundError
from helpdesk.infrastructure.repositories import TicketRepository, UserRepository


def ticket_link(ticket_id: int | None) -> str:
    return f"/tickets/{ticket_id}"


def get_ticket_or_raise(session: Session, ticket_id: int) -> Ticket:
    ticket = TicketRepository(session).get(ticket_id)
    if ticket is None:
        raise TicketNotFoundError(ticket_id)
    return ticket


def ensure_assignable(session: Session, assignee_id: int | None) -> None:
    """Reject assignments to unknown or inactive users."""

    if assignee_id is None:
        return
    assignee = UserRepository(session).get(assignee_id)
    if assignee is None or not assignee.is_active:
        raise ValueError("Responsável não encontrado")


def build_context(
    session: Session, ticket: Ticket, *, actor_id: int | None
) -> RecipientContext:
    return RecipientContext(
        ticket=ticket,
        actor_id=actor_id,
        admin_ids=tuple(UserRepository(session).list_active_admin_ids()),
    )
