"""Repository protocol for asset categories."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from inventory_app.db.models import AssetCategory as CategoryModel


class CategoryRepository(Protocol):
    async def get(self, category_id: str) -> CategoryModel | None:
        ...

    async def get_by_name(self, name: str) -> CategoryModel | None:
        ...

    async def list_categories(self) -> Sequence[CategoryModel]:
        ...

    async def create(self, *, name: str, description: str | None, created_at: datetime) -> CategoryModel:
        ...

    async def count_assets(self, category_id: str) -> int:
        ...

    async def delete(self, category_id: str) -> None:
        ...
