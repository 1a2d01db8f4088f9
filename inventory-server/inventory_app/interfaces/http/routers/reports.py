"""Inventory reports (admin)."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.container import ApplicationContainer
from inventory_app.core.security import require_admin
from inventory_app.interfaces.http.deps import get_container, get_db_session
from inventory_app.modules.common.identity import Identity
from inventory_app.modules.reports import ReportService
from inventory_app.schemas import AssetSummaryResponse, DashboardResponse, TransactionResponse

router = APIRouter()


def _reports(db: AsyncSession, container: ApplicationContainer) -> ReportService:
    return ReportService.with_session(db, container.settings)


@router.get("/asset-summary", response_model=AssetSummaryResponse, summary="Asset counts by status and category")
async def asset_summary(
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
):
    summary = await _reports(db, container).asset_summary()
    return AssetSummaryResponse.model_validate(summary)


@router.get("/transactions/recent", response_model=list[TransactionResponse], summary="Latest ledger entries")
async def recent_transactions(
    limit: int = Query(default=10, ge=1, le=100),
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
):
    records = await _reports(db, container).recent_transactions(limit=limit)
    return [TransactionResponse.model_validate(record) for record in records]


@router.get("/dashboard", response_model=DashboardResponse, summary="Headline counts and latest audits")
async def dashboard(
    _: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
):
    stats = await _reports(db, container).dashboard()
    return DashboardResponse.model_validate(stats)
