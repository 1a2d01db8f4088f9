"""Borrow request domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DECLINED = "DECLINED"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


ACTIVE_STATUSES = (RequestStatus.PENDING, RequestStatus.APPROVED)
TERMINAL_STATUSES = (RequestStatus.DECLINED, RequestStatus.COMPLETE, RequestStatus.CANCELLED)

CANCEL_REASON = "Cancelled by requester"


@dataclass(slots=True)
class BorrowRequest:
    id: str
    asset_id: str
    requester_id: str
    status: RequestStatus
    created_at: datetime
    note: Optional[str] = None
    processed_by_id: Optional[str] = None
    processed_at: Optional[datetime] = None
    decline_reason: Optional[str] = None
    completed_at: Optional[datetime] = None

    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
