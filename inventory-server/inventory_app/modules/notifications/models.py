"""Notification domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Notification:
    id: str
    recipient_id: str
    message: str
    is_read: bool
    created_at: datetime
