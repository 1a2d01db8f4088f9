"""SQLAlchemy repository for borrow requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import ACTIVE_REQUEST_STATUSES, BorrowRequest


class SqlBorrowRequestRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, request_id: str, *, for_update: bool = False) -> BorrowRequest | None:
        stmt = select(BorrowRequest).where(BorrowRequest.id == request_id).execution_options(populate_existing=True)
        if for_update:
            # rendered on PostgreSQL, ignored by SQLite (BEGIN IMMEDIATE already serializes writers)
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def exists_active(self, asset_id: str, requester_id: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(BorrowRequest)
            .where(
                BorrowRequest.asset_id == asset_id,
                BorrowRequest.requester_id == requester_id,
                BorrowRequest.status.in_(ACTIVE_REQUEST_STATUSES),
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def add(
        self,
        *,
        asset_id: str,
        requester_id: str,
        note: Optional[str],
        created_at: datetime,
    ) -> BorrowRequest:
        model = BorrowRequest(
            asset_id=asset_id,
            requester_id=requester_id,
            note=note,
            status="PENDING",
            created_at=created_at,
        )
        self._session.add(model)
        # IntegrityError here means uq_borrow_requests_active_pair fired
        await self._session.flush()
        await self._session.refresh(model)
        return model

    async def transition(
        self,
        request_id: str,
        *,
        expected: str,
        status: str,
        **values: Any,
    ) -> BorrowRequest | None:
        """Compare-and-set the request status; ``None`` when it was not ``expected``."""
        stmt = (
            update(BorrowRequest)
            .where(BorrowRequest.id == request_id, BorrowRequest.status == expected)
            .values(status=status, **values)
            .execution_options(synchronize_session="fetch")
            .returning(BorrowRequest)
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def list_by_status(self, status: str) -> Sequence[BorrowRequest]:
        stmt = (
            select(BorrowRequest)
            .where(BorrowRequest.status == status)
            .order_by(BorrowRequest.created_at, BorrowRequest.id)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def list_by_requester(self, requester_id: str) -> Sequence[BorrowRequest]:
        stmt = (
            select(BorrowRequest)
            .where(BorrowRequest.requester_id == requester_id)
            .order_by(BorrowRequest.created_at.desc(), BorrowRequest.id)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()
