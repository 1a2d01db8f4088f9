"""Report service: asset counts, recent ledger activity and the admin dashboard."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.config import Settings
from inventory_app.infrastructure.database.repositories.report_repository import SqlReportRepository
from inventory_app.modules.assets.models import AssetStatus
from inventory_app.modules.audit import AuditTrail
from inventory_app.modules.ledger import TransactionLedger, TransactionRecord

from .models import AssetSummary, Dashboard
from .repository import ReportRepository


@dataclass(slots=True)
class ReportService:
    repository: ReportRepository
    ledger: TransactionLedger
    audit: AuditTrail

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "ReportService":
        return cls(
            SqlReportRepository(session),
            TransactionLedger.with_session(session),
            AuditTrail.with_session(session, settings),
        )

    async def asset_summary(self) -> AssetSummary:
        """Asset counts per status (every status listed) and per category name."""
        counted = await self.repository.count_assets_by_status()
        by_status = {status.value: counted.get(status.value, 0) for status in AssetStatus}
        by_category = await self.repository.count_assets_by_category()
        return AssetSummary(total=sum(by_status.values()), by_status=by_status, by_category=by_category)

    async def recent_transactions(self, limit: int = 10) -> list[TransactionRecord]:
        return await self.ledger.search(limit=limit)

    async def dashboard(self, audit_limit: int = 5) -> Dashboard:
        summary = await self.asset_summary()
        return Dashboard(
            total_assets=summary.total,
            total_users=await self.repository.count_accounts(),
            total_transactions=await self.repository.count_transactions(),
            recent_audits=await self.audit.recent(limit=audit_limit),
        )
