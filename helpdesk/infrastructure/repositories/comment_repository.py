"""Persistence layer for ticket comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from helpdesk.domain.entities import Comment
from helpdesk.infrastructure.models import CommentModel
from helpdesk.utils import ensure_app_timezone


class CommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            ticket_id=comment.ticket_id,
            user_id=comment.user_id,
            content=comment.content,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            ticket_id=model.ticket_id,
            user_id=model.user_id,
            content=model.content,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["CommentRepository"]
