"""Use case for opening tickets."""

from __future__ import annotations

from sqlalchemy.orm import Session

from helpdesk.application.notifications import (
    TICKET_ASSIGNED,
    TICKET_CREATED_EVENT,
    Notifier,
)
from helpdesk.domain.entities import (
    TICKET_PRIORITIES,
    TICKET_PRIORITY_MEDIUM,
    TICKET_STATUS_OPEN,
    Identity,
    Ticket,
)
from helpdesk.infrastructure.realtime import serialize_ticket
from helpdesk.infrastructure.repositories import TicketRepository

from .common import build_context, ensure_assignable, ticket_link


def create_ticket(
    session: Session,
    notifier: Notifier,
    *,
    creator: Identity,
    title: str,
    description: str,
    priority: str | None = None,
    assignee_id: int | None = None,
) -> Ticket:
    """Persist a new ticket and let admins and the assignee know about it."""

    priority = (priority or TICKET_PRIORITY_MEDIUM).upper()
    if priority not in TICKET_PRIORITIES:
        raise ValueError("Prioridade inválida")
    ensure_assignable(session, assignee_id)

    ticket = TicketRepository(session).create(
        Ticket(
            id=None,
            title=title.strip(),
            description=description,
            status=TICKET_STATUS_OPEN,
            priority=priority,
            creator_id=creator.id,
            assignee_id=assignee_id,
            created_at=None,
            updated_at=None,
        )
    )

    context = build_context(session, ticket, actor_id=creator.id)
    if ticket.assignee_id:
        notifier.notify(
            TICKET_ASSIGNED,
            context,
            title="Ticket Atribuído",
            message=f"Foi-lhe atribuído o ticket #{ticket.id}: {ticket.title}",
            link=ticket_link(ticket.id),
        )
    notifier.broadcast(TICKET_CREATED_EVENT, context, serialize_ticket(ticket))
    return ticket
