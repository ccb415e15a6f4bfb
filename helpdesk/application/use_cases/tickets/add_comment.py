"""Use case for commenting on a ticket."""

from __future__ import annotations

from sqlalchemy.orm import Session

from helpdesk.application.notifications import (
    COMMENT_ADDED,
    COMMENT_ADDED_EVENT,
    Notifier,
)
from helpdesk.domain.entities import Comment, Identity
from helpdesk.infrastructure.realtime import serialize_comment
from helpdesk.infrastructure.repositories import CommentRepository

from .common import build_context, get_ticket_or_raise, ticket_link


def add_comment(
    session: Session,
    notifier: Notifier,
    ticket_id: int,
    *,
    author: Identity,
    content: str,
) -> Comment:
    """Store a comment and notify the other participants of the ticket."""

    content = content.strip()
    if not content:
        raise ValueError("O comentário não pode estar vazio")

    ticket = get_ticket_or_raise(session, ticket_id)
    comment = CommentRepository(session).create(
        Comment(
            id=None,
            ticket_id=ticket.id,
            user_id=author.id,
            content=content,
            created_at=None,
        )
    )

    context = build_context(session, ticket, actor_id=author.id)
    notifier.notify(
        COMMENT_ADDED,
        context,
        title="Novo Comentário",
        message=f"Novo comentário no ticket #{ticket.id}",
        link=ticket_link(ticket.id),
    )
    notifier.broadcast(
        COMMENT_ADDED_EVENT,
        context,
        {"ticket_id": ticket.id, "comment": serialize_comment(comment)},
    )
    return comment
