"""Borrow-request workflow: the checkout state machine for assets."""

from .exceptions import (
    AssetUnavailableError,
    BorrowRequestNotFoundError,
    BorrowRequestStateError,
    DuplicateActiveRequestError,
    NotRequestOwnerError,
)
from .models import ACTIVE_STATUSES, CANCEL_REASON, BorrowRequest, RequestStatus
from .service import BorrowWorkflowEngine

__all__ = [
    "ACTIVE_STATUSES",
    "AssetUnavailableError",
    "BorrowRequest",
    "BorrowRequestNotFoundError",
    "BorrowRequestStateError",
    "BorrowWorkflowEngine",
    "CANCEL_REASON",
    "DuplicateActiveRequestError",
    "NotRequestOwnerError",
    "RequestStatus",
]
