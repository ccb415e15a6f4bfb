"""Ticket endpoints whose mutations emit notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from helpdesk.application.notifications import Notifier
from helpdesk.application.use_cases.tickets import add_comment, create_ticket, update_ticket
from helpdesk.domain.entities import Comment, Identity, Ticket
from helpdesk.domain.exceptions import TicketNotFoundError
from helpdesk.infrastructure.database import get_db
from helpdesk.infrastructure.repositories import TicketRepository
from helpdesk.interfaces.api.dependencies import get_current_identity, get_notifier
from helpdesk.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    TicketCreate,
    TicketRead,
    TicketUpdate,
)

router = APIRouter(prefix="/tickets", tags=["tickets"])


def _ticket_to_schema(ticket: Ticket) -> TicketRead:
    return TicketRead(
        id=ticket.id or 0,
        title=ticket.title,
        description=ticket.description,
        status=ticket.status,
        priority=ticket.priority,
        creator_id=ticket.creator_id,
        assignee_id=ticket.assignee_id,
        created_at=ticket.created_at,
        updated_at=ticket.updated_at,
    )


def _comment_to_schema(comment: Comment) -> CommentRead:
    return CommentRead(
        id=comment.id or 0,
        ticket_id=comment.ticket_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
    )


def _ticket_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket não encontrado")


@router.post("/", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
def create_ticket_endpoint(
    payload: TicketCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    notifier: Notifier = Depends(get_notifier),
) -> TicketRead:
    try:
        ticket = create_ticket(
            db,
            notifier,
            creator=identity,
            title=payload.title,
            description=payload.description,
            priority=payload.priority,
            assignee_id=payload.assignee_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _ticket_to_schema(ticket)


@router.get("/{ticket_id}", response_model=TicketRead)
def get_ticket_endpoint(
    ticket_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> TicketRead:
    ticket = TicketRepository(db).get(ticket_id)
    if ticket is None:
        raise _ticket_not_found()
    return _ticket_to_schema(ticket)


@router.patch("/{ticket_id}", response_model=TicketRead)
def update_ticket_endpoint(
    ticket_id: int,
    payload: TicketUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    notifier: Notifier = Depends(get_notifier),
) -> TicketRead:
    try:
        ticket = update_ticket(
            db,
            notifier,
            ticket_id,
            actor=identity,
            changes=payload.model_dump(exclude_unset=True),
        )
    except TicketNotFoundError as exc:
        raise _ticket_not_found() from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _ticket_to_schema(ticket)


@router.post(
    "/{ticket_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def add_comment_endpoint(
    ticket_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
    notifier: Notifier = Depends(get_notifier),
) -> CommentRead:
    try:
        comment = add_comment(db, notifier, ticket_id, author=identity, content=payload.content)
    except TicketNotFoundError as exc:
        raise _ticket_not_found() from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _comment_to_schema(comment)
