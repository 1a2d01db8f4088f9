"""SQLAlchemy repository for notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import Notification


class SqlNotificationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, *, recipient_id: str, message: str, created_at: datetime) -> Notification:
        model = Notification(recipient_id=recipient_id, message=message, is_read=False, created_at=created_at)
        self._session.add(model)
        await self._session.flush()
        return model

    async def get(self, notification_id: str) -> Notification | None:
        return await self._session.get(Notification, notification_id)

    async def mark_read(self, notification_id: str) -> Notification | None:
        model = await self._session.get(Notification, notification_id)
        if model is None:
            return None
        model.is_read = True
        await self._session.flush()
        return model

    async def list_for_recipient(self, recipient_id: str, *, unread_only: bool) -> Sequence[Notification]:
        stmt = select(Notification).where(Notification.recipient_id == recipient_id)
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        stmt = stmt.order_by(desc(Notification.created_at))
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def count_unread(self, recipient_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.recipient_id == recipient_id, Notification.is_read.is_(False))
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
