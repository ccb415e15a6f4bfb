"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from helpdesk.domain.entities import Notification
from helpdesk.domain.exceptions import NotificationNotFoundError
from helpdesk.infrastructure.models import NotificationModel
from helpdesk.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = 20,
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        model.user_id = notification.recipient_id
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.link = notification.link
        model.read = notification.read
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_read(self, notification_id: int, *, user_id: int) -> Notification:
        """Mark one notification as read, scoped to its recipient."""

        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .one_or_none()
        )
        if model is None:
            raise NotificationNotFoundError(notification_id)
        if not model.read:
            model.read = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [
            notification_id
            for notification_id in notification_ids
            if isinstance(notification_id, int) and not isinstance(notification_id, bool)
        ]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            title=model.title,
            message=model.message,
            type=model.type,
            link=model.link,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


class NotificationStore:
    """Durable notification store consumed by the realtime layer.

    Every call opens its own short-lived session, so the store can be used
    from worker threads while request handlers keep their own sessions.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create_notification(
        self,
        recipient_id: int,
        title: str,
        message: str,
        type: str,
        link: str | None = None,
    ) -> Notification:
        notification = Notification(
            id=None,
            recipient_id=recipient_id,
            title=title,
            message=message,
            type=type,
            link=link,
            read=False,
            created_at=now_in_app_timezone(),
        )
        with self._session_factory() as session:
            return NotificationRepository(session).create(notification)

    def mark_read(self, notification_id: int, recipient_id: int) -> Notification:
        with self._session_factory() as session:
            return NotificationRepository(session).mark_read(
                notification_id, user_id=recipient_id
            )

    def mark_many_read(self, notification_ids: Iterable[int], recipient_id: int) -> int:
        with self._session_factory() as session:
            return NotificationRepository(session).mark_as_read(
                notification_ids, user_id=recipient_id
            )

    def mark_all_read(self, recipient_id: int) -> int:
        with self._session_factory() as session:
            return NotificationRepository(session).mark_all_read(recipient_id)

    def list_notifications(
        self, recipient_id: int, limit: int = 20
    ) -> Sequence[Notification]:
        with self._session_factory() as session:
            return NotificationRepository(session).list_for_user(
                recipient_id, limit=limit
            )


__all__ = ["NotificationRepository", "NotificationStore"]
