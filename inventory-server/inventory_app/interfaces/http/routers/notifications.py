"""Notification inbox endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.security import get_current_identity
from inventory_app.interfaces.http.deps import get_db_session
from inventory_app.interfaces.http.errors import to_http_exception
from inventory_app.modules.common.exceptions import DomainError
from inventory_app.modules.common.identity import Identity
from inventory_app.modules.notifications import NotificationDispatcher
from inventory_app.schemas import NotificationResponse, UnreadCountResponse

router = APIRouter()


@router.get("/", response_model=list[NotificationResponse], summary="Caller's notifications, newest first")
async def list_notifications(
    unread_only: bool = False,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    notifications = await NotificationDispatcher.with_session(db).list_for_recipient(
        identity.id, unread_only=unread_only
    )
    return [NotificationResponse.model_validate(item) for item in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse, summary="Unread notification count")
async def unread_count(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    return UnreadCountResponse(unread=await NotificationDispatcher.with_session(db).unread_count(identity.id))


@router.post("/{notification_id}/read", response_model=NotificationResponse, summary="Mark a notification read")
async def mark_read(
    notification_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        notification = await NotificationDispatcher.with_session(db).mark_read(
            notification_id, recipient_id=identity.id
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    await db.commit()
    return NotificationResponse.model_validate(notification)
