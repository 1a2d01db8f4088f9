"""Ledger domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class TransactionAction(str, Enum):
    CREATE = "CREATE"
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    MAINTENANCE = "MAINTENANCE"
    DAMAGED = "DAMAGED"
    RETIRE = "RETIRE"
    RETURN = "RETURN"


_STATUS_ACTIONS = {
    "AVAILABLE": TransactionAction.AVAILABLE,
    "IN_USE": TransactionAction.IN_USE,
    "MAINTENANCE": TransactionAction.MAINTENANCE,
    "DAMAGED": TransactionAction.DAMAGED,
    "RETIRED": TransactionAction.RETIRE,
}


def action_for_status(status: Any) -> TransactionAction:
    """Ledger action recorded when an asset moves into ``status``.

    Unknown or unset statuses fall back to CREATE.
    """
    key = getattr(status, "value", status)
    return _STATUS_ACTIONS.get(key, TransactionAction.CREATE)


@dataclass(slots=True)
class TransactionRecord:
    id: int
    asset_id: str
    user_id: str
    action: TransactionAction
    transaction_date: datetime
    notes: Optional[str]
