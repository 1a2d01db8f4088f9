"""Notification specific exceptions."""

from inventory_app.modules.common.exceptions import NotFoundError


class NotificationNotFoundError(NotFoundError):
    def __init__(self, notification_id: str) -> None:
        super().__init__(f"notification not found: {notification_id}")
        self.notification_id = notification_id
