"""Category service: the minimum needed for assets to reference a category."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import AssetCategory as CategoryModel
from inventory_app.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from inventory_app.modules.common.utils import utcnow

from .exceptions import CategoryAlreadyExistsError, CategoryInUseError, CategoryNotFoundError
from .models import Category
from .repository import CategoryRepository


@dataclass(slots=True)
class CategoryService:
    repository: CategoryRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CategoryService":
        return cls(SqlCategoryRepository(session))

    async def create(self, *, name: str, description: Optional[str] = None) -> Category:
        if await self.repository.get_by_name(name) is not None:
            raise CategoryAlreadyExistsError(f"category already exists: {name}")
        model = await self.repository.create(name=name, description=description, created_at=utcnow())
        return self._to_domain(model)

    async def get(self, category_id: str) -> Category:
        model = await self.repository.get(category_id)
        if model is None:
            raise CategoryNotFoundError(category_id)
        return self._to_domain(model)

    async def list_categories(self) -> list[Category]:
        return [self._to_domain(model) for model in await self.repository.list_categories()]

    async def delete(self, category_id: str) -> None:
        if await self.repository.get(category_id) is None:
            raise CategoryNotFoundError(category_id)
        in_use = await self.repository.count_assets(category_id)
        if in_use:
            raise CategoryInUseError(f"category {category_id} is referenced by {in_use} asset(s)")
        await self.repository.delete(category_id)

    @staticmethod
    def _to_domain(model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=model.created_at,
        )
