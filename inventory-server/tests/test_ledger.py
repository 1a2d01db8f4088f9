"""Transaction ledger ordering, search and the status-to-action mapping."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from inventory_app.modules.assets import AssetStatus
from inventory_app.modules.common.exceptions import ValidationError
from inventory_app.modules.ledger import (
    TransactionAction,
    TransactionLedger,
    TransactionNotFoundError,
    action_for_status,
)


@pytest.mark.parametrize(
    ("status", "action"),
    [
        (AssetStatus.AVAILABLE, TransactionAction.AVAILABLE),
        (AssetStatus.IN_USE, TransactionAction.IN_USE),
        (AssetStatus.MAINTENANCE, TransactionAction.MAINTENANCE),
        (AssetStatus.DAMAGED, TransactionAction.DAMAGED),
        (AssetStatus.RETIRED, TransactionAction.RETIRE),
        ("RETIRED", TransactionAction.RETIRE),
        (None, TransactionAction.CREATE),
        ("SOMETHING_ELSE", TransactionAction.CREATE),
    ],
)
def test_action_for_status(status, action):
    assert action_for_status(status) is action


@pytest.mark.asyncio
async def test_history_is_chronological_and_search_newest_first(session_factory, admin, alice):
    base = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    async with session_factory.begin() as session:
        ledger = TransactionLedger.with_session(session)
        first = await ledger.append(asset_id="a-1", actor=admin, action="create", timestamp=base)
        second = await ledger.append(
            asset_id="a-1", actor=alice, action=TransactionAction.IN_USE, timestamp=base + timedelta(hours=1)
        )
        third = await ledger.append(
            asset_id="a-1", actor=alice, action=TransactionAction.RETURN, timestamp=base + timedelta(hours=2)
        )
        await ledger.append(asset_id="a-2", actor=admin, action=TransactionAction.CREATE, timestamp=base)

        history = await ledger.list_for_asset("a-1")
        latest = await ledger.latest_for("a-1")
        alice_history = await ledger.list_for_user(alice.id)
        newest = await ledger.search(asset_id="a-1", limit=2)
        creates = await ledger.search(action="CREATE")

    assert [record.id for record in history] == [first.id, second.id, third.id]
    assert latest.id == third.id
    assert [record.action for record in alice_history] == [TransactionAction.IN_USE, TransactionAction.RETURN]
    assert [record.id for record in newest] == [third.id, second.id]
    assert {record.asset_id for record in creates} == {"a-1", "a-2"}


@pytest.mark.asyncio
async def test_same_timestamp_orders_by_id(session_factory, admin):
    stamp = datetime(2025, 3, 1, tzinfo=timezone.utc)
    async with session_factory.begin() as session:
        ledger = TransactionLedger.with_session(session)
        first = await ledger.append(asset_id="a-1", actor=admin, action="AVAILABLE", timestamp=stamp)
        second = await ledger.append(asset_id="a-1", actor=admin, action="DAMAGED", timestamp=stamp)

        assert (await ledger.latest_for("a-1")).id == second.id
        assert [record.id for record in await ledger.list_for_asset("a-1")] == [first.id, second.id]


@pytest.mark.asyncio
async def test_append_validates_action_and_truncates_notes(session_factory, admin):
    async with session_factory.begin() as session:
        ledger = TransactionLedger.with_session(session)
        with pytest.raises(ValidationError):
            await ledger.append(asset_id="a-1", actor=admin, action="BORROWED")

        record = await ledger.append(asset_id="a-1", actor=admin, action="CREATE", notes="n" * 600)
        assert len(record.notes) == 500
        assert (await ledger.get(record.id)).notes == record.notes

        with pytest.raises(TransactionNotFoundError):
            await ledger.get(record.id + 1000)
        assert await ledger.latest_for("unknown") is None
