"""SQLAlchemy implementation for asset categories."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import Asset, AssetCategory


class SqlCategoryRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, category_id: str) -> AssetCategory | None:
        return await self.session.get(AssetCategory, category_id)

    async def get_by_name(self, name: str) -> AssetCategory | None:
        stmt = select(AssetCategory).where(AssetCategory.name == name)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_categories(self) -> Sequence[AssetCategory]:
        result = await self.session.execute(select(AssetCategory).order_by(AssetCategory.name))
        return result.scalars().all()

    async def create(self, *, name: str, description: str | None, created_at: datetime) -> AssetCategory:
        category = AssetCategory(name=name, description=description, created_at=created_at)
        self.session.add(category)
        await self.session.flush()
        return category

    async def count_assets(self, category_id: str) -> int:
        stmt = select(func.count()).select_from(Asset).where(Asset.category_id == category_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete(self, category_id: str) -> None:
        await self.session.execute(delete(AssetCategory).where(AssetCategory.id == category_id))
