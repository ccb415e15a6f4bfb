"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, status
from sqlalchemy.orm import Session

from helpdesk.config import get_settings
from helpdesk.domain.entities import Identity, Notification
from helpdesk.domain.exceptions import NotificationNotFoundError
from helpdesk.infrastructure.database import get_db
from helpdesk.infrastructure.repositories import NotificationRepository
from helpdesk.interfaces.api.dependencies import get_current_identity
from helpdesk.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationUpdateResult,
    UnreadCount,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        link=notification.link,
        read=notification.read,
        created_at=notification.created_at,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int | None = Query(default=None, ge=1, le=100),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user.

    This is the authoritative view clients must load on every (re)connect;
    websocket pushes only signal that it changed.
    """

    limit = limit or get_settings().notification_list_limit
    notifications = NotificationRepository(db).list_for_user(identity.id, limit=limit)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> UnreadCount:
    return UnreadCount(unread=NotificationRepository(db).count_unread(identity.id))


@router.patch("/read-all", response_model=NotificationUpdateResult)
def mark_all_as_read(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> NotificationUpdateResult:
    updated = NotificationRepository(db).mark_all_read(identity.id)
    return NotificationUpdateResult(updated=updated)


@router.post("/read", response_model=NotificationUpdateResult)
def mark_many_as_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> NotificationUpdateResult:
    updated = NotificationRepository(db).mark_as_read(
        payload.unique_ids(), user_id=identity.id
    )
    return NotificationUpdateResult(updated=updated)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> NotificationRead:
    try:
        notification = NotificationRepository(db).mark_read(
            notification_id, user_id=identity.id
        )
    except NotificationNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notificação não encontrada",
        ) from exc
    return _notification_to_schema(notification)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    await websocket.app.state.realtime.sessions.serve(websocket)
