"""SQLAlchemy repository for the asset transaction ledger."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import AssetTransaction


class SqlTransactionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        asset_id: str,
        user_id: str,
        action: str,
        transaction_date: datetime,
        notes: str | None,
    ) -> AssetTransaction:
        model = AssetTransaction(
            asset_id=asset_id,
            user_id=user_id,
            action=action,
            transaction_date=transaction_date,
            notes=notes,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return model

    async def get(self, record_id: int) -> AssetTransaction | None:
        return await self._session.get(AssetTransaction, record_id)

    async def latest_for_asset(self, asset_id: str) -> AssetTransaction | None:
        stmt = (
            select(AssetTransaction)
            .where(AssetTransaction.asset_id == asset_id)
            .order_by(AssetTransaction.transaction_date.desc(), AssetTransaction.id.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def search(
        self,
        *,
        asset_id: str | None,
        user_id: str | None,
        action: str | None,
        limit: int | None,
        offset: int,
    ) -> Sequence[AssetTransaction]:
        stmt = select(AssetTransaction)
        if asset_id:
            stmt = stmt.where(AssetTransaction.asset_id == asset_id)
        if user_id:
            stmt = stmt.where(AssetTransaction.user_id == user_id)
        if action:
            stmt = stmt.where(AssetTransaction.action == action)
        if limit is None:
            # full history reads are chronological
            stmt = stmt.order_by(AssetTransaction.transaction_date, AssetTransaction.id)
        else:
            stmt = (
                stmt.order_by(AssetTransaction.transaction_date.desc(), AssetTransaction.id.desc())
                .offset(offset)
                .limit(limit)
            )
        result = await self._session.execute(stmt)
        return result.scalars().all()
