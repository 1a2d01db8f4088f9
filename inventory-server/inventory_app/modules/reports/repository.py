"""Repository protocol for report aggregates."""

from __future__ import annotations

from typing import Protocol


class ReportRepository(Protocol):
    async def count_assets_by_status(self) -> dict[str, int]:
        ...

    async def count_assets_by_category(self) -> dict[str, int]:
        ...

    async def count_accounts(self) -> int:
        ...

    async def count_transactions(self) -> int:
        ...
