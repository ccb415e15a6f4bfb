"""Use case for changing status, priority or assignee of a ticket."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from helpdesk.application.notifications import (
    STATUS_CHANGED,
    TICKET_ASSIGNED,
    TICKET_UPDATED_EVENT,
    Notifier,
)
from helpdesk.domain.entities import TICKET_PRIORITIES, TICKET_STATUSES, Identity, Ticket
from helpdesk.infrastructure.realtime import serialize_ticket
from helpdesk.infrastructure.repositories import TicketRepository

from .common import build_context, ensure_assignable, get_ticket_or_raise, ticket_link

_UPDATABLE_FIELDS = frozenset({"status", "priority", "assignee_id"})


def update_ticket(
    session: Session,
    notifier: Notifier,
    ticket_id: int,
    *,
    actor: Identity,
    changes: Mapping[str, Any],
) -> Ticket:
    """Apply ``changes`` and notify the people affected by them.

    Only keys present in ``changes`` are touched, so ``{"assignee_id": None}``
    unassigns the ticket while an empty mapping leaves it as is.
    """

    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Campos não editáveis: {', '.join(sorted(unknown))}")

    current = get_ticket_or_raise(session, ticket_id)
    updates: dict[str, Any] = {}

    if "status" in changes:
        status = str(changes["status"]).upper()
        if status not in TICKET_STATUSES:
            raise ValueError("Estado inválido")
        updates["status"] = status
    if "priority" in changes:
        priority = str(changes["priority"]).upper()
        if priority not in TICKET_PRIORITIES:
            raise ValueError("Prioridade inválida")
        updates["priority"] = priority
    if "assignee_id" in changes:
        ensure_assignable(session, changes["assignee_id"])
        updates["assignee_id"] = changes["assignee_id"]

    ticket = TicketRepository(session).update(replace(current, **updates))

    context = build_context(session, ticket, actor_id=actor.id)
    if ticket.assignee_id and ticket.assignee_id != current.assignee_id:
        notifier.notify(
            TICKET_ASSIGNED,
            context,
            title="Ticket Atribuído",
            message=f"Foi-lhe atribuído o ticket #{ticket.id}: {ticket.title}",
            link=ticket_link(ticket.id),
        )
    if ticket.status != current.status:
        notifier.notify(
            STATUS_CHANGED,
            context,
            title="Estado Atualizado",
            message=f"O ticket #{ticket.id} mudou para {ticket.status}",
            link=ticket_link(ticket.id),
        )
    notifier.broadcast(TICKET_UPDATED_EVENT, context, serialize_ticket(ticket))
    return ticket
