"""SQLAlchemy implementation for the asset registry."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import Account, Asset, AssetCategory, BorrowRequest


class SqlAssetRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, asset_id: str) -> Asset | None:
        stmt = select(Asset).where(Asset.id == asset_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_name(self, name: str) -> Asset | None:
        stmt = select(Asset).where(Asset.name == name)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_serial(self, serial_number: str) -> Asset | None:
        stmt = select(Asset).where(Asset.serial_number == serial_number)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def category_exists(self, category_id: str) -> bool:
        stmt = select(func.count()).select_from(AssetCategory).where(AssetCategory.id == category_id)
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def add(self, **values: Any) -> Asset:
        asset = Asset(**values)
        self.session.add(asset)
        await self.session.flush()
        await self.session.refresh(asset)
        return asset

    async def save(self, model: Asset) -> Asset:
        await self.session.flush()
        await self.session.refresh(model)
        return model

    async def delete(self, asset_id: str) -> None:
        await self.session.execute(delete(Asset).where(Asset.id == asset_id))

    async def search(
        self,
        *,
        status: str | None,
        category_id: str | None,
        text: str | None,
        limit: int | None,
        offset: int,
    ) -> tuple[Sequence[Asset], int]:
        conditions = []
        if status:
            conditions.append(Asset.status == status)
        if category_id:
            conditions.append(Asset.category_id == category_id)
        if text:
            pattern = f"%{text}%"
            conditions.append(or_(Asset.name.ilike(pattern), Asset.serial_number.ilike(pattern)))

        count_stmt = select(func.count()).select_from(Asset).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = select(Asset).where(*conditions).order_by(Asset.name).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return result.scalars().all(), int(total)

    async def count_borrow_requests(self, asset_id: str) -> int:
        stmt = select(func.count()).select_from(BorrowRequest).where(BorrowRequest.asset_id == asset_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def usernames_for(self, account_ids: Sequence[str]) -> dict[str, str]:
        ids = {account_id for account_id in account_ids if account_id}
        if not ids:
            return {}
        stmt = select(Account.id, Account.username).where(Account.id.in_(ids))
        result = await self.session.execute(stmt)
        return {row.id: row.username for row in result.all()}

    async def transition_status(
        self,
        asset_id: str,
        *,
        expected: str,
        status: str,
        holder_id: str | None,
        updated_at: datetime,
        expected_holder_id: str | None = None,
    ) -> Asset | None:
        """Compare-and-set the asset status; ``None`` when the guard did not match."""
        stmt = update(Asset).where(Asset.id == asset_id, Asset.status == expected)
        if expected_holder_id is not None:
            stmt = stmt.where(Asset.current_holder_id == expected_holder_id)
        stmt = (
            stmt.values(status=status, current_holder_id=holder_id, updated_at=updated_at)
            .execution_options(synchronize_session="fetch")
            .returning(Asset)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
