"""Notification dispatcher.

``notify`` raises on failure like any other write; the workflow engine wraps
every dispatch so a failed notification never fails the triggering operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import Notification as NotificationModel
from inventory_app.infrastructure.database.repositories.notification_repository import SqlNotificationRepository
from inventory_app.modules.common.utils import utcnow

from .exceptions import NotificationNotFoundError
from .models import Notification
from .repository import NotificationRepository


@dataclass(slots=True)
class NotificationDispatcher:
    repository: NotificationRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "NotificationDispatcher":
        return cls(SqlNotificationRepository(session))

    async def notify(self, recipient_id: str, message: str) -> Notification:
        model = await self.repository.add(recipient_id=recipient_id, message=message, created_at=utcnow())
        return self._to_domain(model)

    async def notify_many(self, recipient_ids: Iterable[str], message: str) -> list[Notification]:
        return [await self.notify(recipient_id, message) for recipient_id in recipient_ids]

    async def mark_read(self, notification_id: str, *, recipient_id: str | None = None) -> Notification:
        """Mark a notification read; another recipient's notification is reported as missing."""
        if recipient_id is not None:
            existing = await self.repository.get(notification_id)
            if existing is None or existing.recipient_id != recipient_id:
                raise NotificationNotFoundError(notification_id)
        model = await self.repository.mark_read(notification_id)
        if model is None:
            raise NotificationNotFoundError(notification_id)
        return self._to_domain(model)

    async def list_for_recipient(self, recipient_id: str, *, unread_only: bool = False) -> list[Notification]:
        rows = await self.repository.list_for_recipient(recipient_id, unread_only=unread_only)
        return [self._to_domain(row) for row in rows]

    async def unread_count(self, recipient_id: str) -> int:
        return await self.repository.count_unread(recipient_id)

    @staticmethod
    def _to_domain(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            message=model.message,
            is_read=bool(model.is_read),
            created_at=model.created_at,
        )
