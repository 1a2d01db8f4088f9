"""Repository protocol for the asset transaction ledger."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from inventory_app.db.models import AssetTransaction as AssetTransactionModel


class TransactionRepository(Protocol):
    async def add(
        self,
        *,
        asset_id: str,
        user_id: str,
        action: str,
        transaction_date: datetime,
        notes: str | None,
    ) -> AssetTransactionModel:
        ...

    async def get(self, record_id: int) -> AssetTransactionModel | None:
        ...

    async def latest_for_asset(self, asset_id: str) -> AssetTransactionModel | None:
        ...

    async def search(
        self,
        *,
        asset_id: str | None,
        user_id: str | None,
        action: str | None,
        limit: int | None,
        offset: int,
    ) -> Sequence[AssetTransactionModel]:
        ...
