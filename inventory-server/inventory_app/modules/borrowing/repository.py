"""Repository interfaces for borrow requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from inventory_app.db.models import BorrowRequest as BorrowRequestModel


class BorrowRequestRepository(Protocol):
    async def get(self, request_id: str, *, for_update: bool = False) -> BorrowRequestModel | None:
        ...

    async def exists_active(self, asset_id: str, requester_id: str) -> bool:
        ...

    async def add(
        self,
        *,
        asset_id: str,
        requester_id: str,
        note: Optional[str],
        created_at: datetime,
    ) -> BorrowRequestModel:
        ...

    async def transition(
        self,
        request_id: str,
        *,
        expected: str,
        status: str,
        **values: Any,
    ) -> BorrowRequestModel | None:
        ...

    async def list_by_status(self, status: str) -> Sequence[BorrowRequestModel]:
        ...

    async def list_by_requester(self, requester_id: str) -> Sequence[BorrowRequestModel]:
        ...
