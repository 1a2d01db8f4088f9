"""Repository protocol for assets."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from inventory_app.db.models import Asset as AssetModel


class AssetRepository(Protocol):
    async def get(self, asset_id: str) -> AssetModel | None:
        ...

    async def get_by_name(self, name: str) -> AssetModel | None:
        ...

    async def get_by_serial(self, serial_number: str) -> AssetModel | None:
        ...

    async def category_exists(self, category_id: str) -> bool:
        ...

    async def add(self, **values: Any) -> AssetModel:
        ...

    async def save(self, model: AssetModel) -> AssetModel:
        ...

    async def delete(self, asset_id: str) -> None:
        ...

    async def search(
        self,
        *,
        status: str | None,
        category_id: str | None,
        text: str | None,
        limit: int | None,
        offset: int,
    ) -> tuple[Sequence[AssetModel], int]:
        ...

    async def count_borrow_requests(self, asset_id: str) -> int:
        ...

    async def usernames_for(self, account_ids: Sequence[str]) -> dict[str, str]:
        ...

    async def transition_status(
        self,
        asset_id: str,
        *,
        expected: str,
        status: str,
        holder_id: str | None,
        updated_at: datetime,
        expected_holder_id: str | None = None,
    ) -> AssetModel | None:
        ...
