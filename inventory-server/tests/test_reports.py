"""Inventory reports: asset counts, recent ledger activity and the dashboard."""

from __future__ import annotations

import pytest

from inventory_app.modules.assets import AssetCreateInput, AssetRegistry
from inventory_app.modules.categories import CategoryService
from inventory_app.modules.ledger import TransactionAction
from inventory_app.modules.reports import ReportService


@pytest.mark.asyncio
async def test_asset_summary_counts_every_status_and_category(session_factory, settings, admin, alice, asset, workflow):
    async with session_factory.begin() as session:
        cameras = await CategoryService.with_session(session).create(name="Cameras")
        registry = AssetRegistry.with_session(session, settings)
        camera = await registry.create(
            admin, AssetCreateInput(name="Camera 01", serial_number="CAM-01", category_id=cameras.id)
        )
        await registry.soft_retire(admin, camera.id)
    request = await workflow.create(alice, asset.id)
    await workflow.approve(request.id, admin)

    async with session_factory() as session:
        summary = await ReportService.with_session(session, settings).asset_summary()

    assert summary.total == 2
    assert summary.by_status == {
        "AVAILABLE": 0,
        "IN_USE": 1,
        "MAINTENANCE": 0,
        "DAMAGED": 0,
        "RETIRED": 1,
    }
    assert summary.by_category == {"Cameras": 1, "Laptops": 1}


@pytest.mark.asyncio
async def test_recent_transactions_and_dashboard(session_factory, settings, admin, alice, asset, workflow):
    request = await workflow.create(alice, asset.id)
    await workflow.approve(request.id, admin)

    async with session_factory() as session:
        reports = ReportService.with_session(session, settings)
        recent = await reports.recent_transactions(limit=1)
        dashboard = await reports.dashboard()

    assert [record.action for record in recent] == [TransactionAction.IN_USE]
    assert dashboard.total_assets == 1
    assert dashboard.total_users == 3
    assert dashboard.total_transactions == 2
    assert dashboard.recent_audits[0].action_type == "BORROW APPROVED"
    assert len(dashboard.recent_audits) <= 5
