"""In-app notifications delivered to users."""

from .exceptions import NotificationNotFoundError
from .models import Notification
from .service import NotificationDispatcher

__all__ = ["Notification", "NotificationDispatcher", "NotificationNotFoundError"]
