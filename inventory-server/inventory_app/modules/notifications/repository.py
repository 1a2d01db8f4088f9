"""Repository protocol for notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from inventory_app.db.models import Notification as NotificationModel


class NotificationRepository(Protocol):
    async def add(self, *, recipient_id: str, message: str, created_at: datetime) -> NotificationModel:
        ...

    async def get(self, notification_id: str) -> NotificationModel | None:
        ...

    async def mark_read(self, notification_id: str) -> NotificationModel | None:
        ...

    async def list_for_recipient(self, recipient_id: str, *, unread_only: bool) -> Sequence[NotificationModel]:
        ...

    async def count_unread(self, recipient_id: str) -> int:
        ...
