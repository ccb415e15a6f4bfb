"""Persistence layer for tickets."""

from __future__ import annotations

from sqlalchemy.orm import Session

from helpdesk.domain.entities import Ticket
from helpdesk.infrastructure.models import TicketModel
from helpdesk.utils import ensure_app_timezone


class TicketRepository:
    """Provide the ticket operations the notification callers rely on."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, ticket_id: int) -> Ticket | None:
        model = self.session.get(TicketModel, ticket_id)
        return self._to_entity(model) if model else None

    def create(self, ticket: Ticket) -> Ticket:
        model = TicketModel(
            title=ticket.title,
            description=ticket.description,
            status=ticket.status,
            priority=ticket.priority,
            creator_id=ticket.creator_id,
            assignee_id=ticket.assignee_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, ticket: Ticket) -> Ticket:
        model = self.session.get(TicketModel, ticket.id)
        if model is None:
            msg = f"Ticket with id {ticket.id} not found"
            raise ValueError(msg)
        model.title = ticket.title
        model.description = ticket.description
        model.status = ticket.status
        model.priority = ticket.priority
        model.assignee_id = ticket.assignee_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: TicketModel) -> Ticket:
        return Ticket(
            id=model.id,
            title=model.title,
            description=model.description,
            status=model.status,
            priority=model.priority,
            creator_id=model.creator_id,
            assignee_id=model.assignee_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TicketRepository"]
