"""Ledger specific exceptions."""

from inventory_app.modules.common.exceptions import NotFoundError


class TransactionNotFoundError(NotFoundError):
    def __init__(self, record_id: int) -> None:
        super().__init__(f"asset transaction not found: {record_id}")
        self.record_id = record_id
