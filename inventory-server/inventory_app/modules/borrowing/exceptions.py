"""Borrow workflow specific exceptions."""

from inventory_app.modules.common.exceptions import ConflictError, ForbiddenError, NotFoundError


class BorrowRequestNotFoundError(NotFoundError):
    def __init__(self, request_id: str) -> None:
        super().__init__(f"borrow request not found: {request_id}")
        self.request_id = request_id


class BorrowRequestStateError(ConflictError):
    """Raised when a transition is applied to a request in the wrong status."""

    def __init__(self, request_id: str, current: str, expected: str) -> None:
        super().__init__(f"borrow request {request_id} is {current}, expected {expected}")
        self.request_id = request_id
        self.current = current
        self.expected = expected


class DuplicateActiveRequestError(ConflictError):
    """Raised when the requester already has a pending or approved request for the asset."""

    def __init__(self, asset_id: str, requester_id: str) -> None:
        super().__init__(f"an active borrow request already exists for asset {asset_id}")
        self.asset_id = asset_id
        self.requester_id = requester_id


class AssetUnavailableError(ConflictError):
    """Raised when approval finds the asset no longer AVAILABLE."""


class NotRequestOwnerError(ForbiddenError):
    def __init__(self, request_id: str) -> None:
        super().__init__(f"borrow request {request_id} belongs to another user")
        self.request_id = request_id
