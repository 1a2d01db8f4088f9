"""Append-only ledger of asset-state-affecting events."""

from .exceptions import TransactionNotFoundError
from .models import TransactionAction, TransactionRecord, action_for_status
from .service import TransactionLedger

__all__ = [
    "TransactionAction",
    "TransactionLedger",
    "TransactionNotFoundError",
    "TransactionRecord",
    "action_for_status",
]
