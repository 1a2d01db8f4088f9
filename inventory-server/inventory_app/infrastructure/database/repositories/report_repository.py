"""SQLAlchemy aggregates backing the report service."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import Account, Asset, AssetCategory, AssetTransaction


class SqlReportRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def count_assets_by_status(self) -> dict[str, int]:
        stmt = select(Asset.status, func.count(Asset.id)).group_by(Asset.status)
        result = await self.session.execute(stmt)
        return {status: int(count) for status, count in result.all()}

    async def count_assets_by_category(self) -> dict[str, int]:
        stmt = (
            select(AssetCategory.name, func.count(Asset.id))
            .join(Asset, Asset.category_id == AssetCategory.id)
            .group_by(AssetCategory.name)
            .order_by(AssetCategory.name)
        )
        result = await self.session.execute(stmt)
        return {name: int(count) for name, count in result.all()}

    async def count_accounts(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Account))
        return int(result.scalar_one())

    async def count_transactions(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(AssetTransaction))
        return int(result.scalar_one())
