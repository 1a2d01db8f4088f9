"""Borrow-request state machine: transitions, guards and their effect on the asset."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import func, select

from inventory_app.db.models import BorrowRequest as BorrowRequestModel
from inventory_app.infrastructure.database.repositories.asset_repository import SqlAssetRepository
from inventory_app.modules.accounts import AccountNotFoundError
from inventory_app.modules.assets import AssetNotFoundError, AssetRegistry, AssetStatus
from inventory_app.modules.audit import AuditTrail
from inventory_app.modules.borrowing import (
    CANCEL_REASON,
    AssetUnavailableError,
    BorrowRequestNotFoundError,
    BorrowRequestStateError,
    DuplicateActiveRequestError,
    NotRequestOwnerError,
    RequestStatus,
)
from inventory_app.modules.common.exceptions import ConflictError, ValidationError
from inventory_app.modules.common.identity import Identity, Role
from inventory_app.modules.ledger import TransactionAction, TransactionLedger


async def _asset_status(session_factory, settings, asset_id):
    async with session_factory() as session:
        return (await AssetRegistry.with_session(session, settings).get(asset_id)).status


async def _ledger(session_factory, asset_id):
    async with session_factory() as session:
        return await TransactionLedger.with_session(session).list_for_asset(asset_id)


async def _active_count(session_factory, asset_id, requester_id):
    async with session_factory() as session:
        stmt = (
            select(func.count())
            .select_from(BorrowRequestModel)
            .where(
                BorrowRequestModel.asset_id == asset_id,
                BorrowRequestModel.requester_id == requester_id,
                BorrowRequestModel.status.in_(["PENDING", "APPROVED"]),
            )
        )
        return (await session.execute(stmt)).scalar_one()


@pytest.mark.asyncio
async def test_request_approve_complete_round_trip(workflow, session_factory, settings, admin, alice, asset):
    request = await workflow.create(alice, asset.id, "need for demo")
    assert request.status == RequestStatus.PENDING
    assert request.note == "need for demo"

    approved = await workflow.approve(request.id, admin)
    assert approved.status == RequestStatus.APPROVED
    assert approved.processed_by_id == admin.id
    assert approved.processed_at is not None
    assert await _asset_status(session_factory, settings, asset.id) == AssetStatus.IN_USE

    entries = await _ledger(session_factory, asset.id)
    in_use = [entry for entry in entries if entry.action == TransactionAction.IN_USE]
    assert len(in_use) == 1
    assert in_use[0].user_id == alice.id

    completed = await workflow.complete_by_requester(request.id, alice)
    assert completed.status == RequestStatus.COMPLETE
    assert completed.completed_at is not None
    assert await _asset_status(session_factory, settings, asset.id) == AssetStatus.AVAILABLE

    actions = [entry.action for entry in await _ledger(session_factory, asset.id)]
    assert actions == [TransactionAction.CREATE, TransactionAction.IN_USE, TransactionAction.RETURN]


@pytest.mark.asyncio
async def test_second_request_for_same_pair_is_rejected(workflow, session_factory, alice, asset):
    await workflow.create(alice, asset.id)

    with pytest.raises(DuplicateActiveRequestError):
        await workflow.create(alice, asset.id)

    assert await _active_count(session_factory, asset.id, alice.id) == 1
    assert await workflow.has_active_or_pending(alice.id, asset.id) is True


@pytest.mark.asyncio
async def test_decline_leaves_asset_untouched(workflow, session_factory, settings, admin, alice, asset):
    request = await workflow.create(alice, asset.id)

    declined = await workflow.decline(request.id, admin, reason="asset needed elsewhere")

    assert declined.status == RequestStatus.DECLINED
    assert declined.decline_reason == "asset needed elsewhere"
    assert declined.processed_by_id == admin.id
    assert await _asset_status(session_factory, settings, asset.id) == AssetStatus.AVAILABLE
    assert await workflow.has_active_or_pending(alice.id, asset.id) is False


@pytest.mark.asyncio
async def test_new_request_allowed_after_previous_one_finished(workflow, admin, alice, asset):
    first = await workflow.create(alice, asset.id)
    await workflow.decline(first.id, admin)

    second = await workflow.create(alice, asset.id)

    assert second.id != first.id
    assert second.status == RequestStatus.PENDING


@pytest.mark.asyncio
async def test_create_requires_existing_asset_and_requester(workflow, alice, asset):
    with pytest.raises(AssetNotFoundError):
        await workflow.create(alice, "missing-asset")
    with pytest.raises(AccountNotFoundError):
        await workflow.create(Identity(id="ghost", username="ghost", role=Role.VIEWER), asset.id)


@pytest.mark.asyncio
@pytest.mark.parametrize("decide_first", ["approve", "decline"])
@pytest.mark.parametrize("decide_again", ["approve", "decline"])
async def test_decided_request_cannot_be_decided_again(
    workflow, session_factory, settings, admin, alice, asset, decide_first, decide_again
):
    request = await workflow.create(alice, asset.id)
    await getattr(workflow, decide_first)(request.id, admin)
    ledger_before = await _ledger(session_factory, asset.id)
    status_before = await _asset_status(session_factory, settings, asset.id)

    with pytest.raises(BorrowRequestStateError):
        await getattr(workflow, decide_again)(request.id, admin)

    assert await _ledger(session_factory, asset.id) == ledger_before
    assert await _asset_status(session_factory, settings, asset.id) == status_before


@pytest.mark.asyncio
async def test_concurrent_approvals_have_a_single_winner(workflow, session_factory, accounts, alice, asset):
    request = await workflow.create(alice, asset.id)

    results = await asyncio.gather(
        workflow.approve(request.id, accounts["admin"]),
        workflow.approve(request.id, accounts["admin"]),
        return_exceptions=True,
    )

    winners = [result for result in results if not isinstance(result, BaseException)]
    losers = [result for result in results if isinstance(result, BaseException)]
    assert len(winners) == 1
    assert len(losers) == 1
    assert isinstance(losers[0], ConflictError)

    entries = await _ledger(session_factory, asset.id)
    assert [entry.action for entry in entries].count(TransactionAction.IN_USE) == 1


@pytest.mark.asyncio
async def test_concurrent_creation_keeps_one_active_request(workflow, session_factory, alice, asset):
    results = await asyncio.gather(
        workflow.create(alice, asset.id),
        workflow.create(alice, asset.id),
        return_exceptions=True,
    )

    failures = [result for result in results if isinstance(result, BaseException)]
    assert len(failures) == 1
    assert isinstance(failures[0], DuplicateActiveRequestError)
    assert await _active_count(session_factory, asset.id, alice.id) == 1


@pytest.mark.asyncio
async def test_asset_cannot_be_lent_twice(workflow, session_factory, admin, alice, bob, asset):
    alice_request = await workflow.create(alice, asset.id)
    bob_request = await workflow.create(bob, asset.id)
    await workflow.approve(alice_request.id, admin)

    with pytest.raises(AssetUnavailableError):
        await workflow.approve(bob_request.id, admin)

    # the failed approval rolled back entirely
    assert (await workflow.get(bob_request.id)).status == RequestStatus.PENDING
    entries = await _ledger(session_factory, asset.id)
    assert [entry.action for entry in entries].count(TransactionAction.IN_USE) == 1


@pytest.mark.asyncio
async def test_cancel_only_by_owner_while_pending(workflow, admin, alice, bob, asset):
    request = await workflow.create(alice, asset.id)

    with pytest.raises(NotRequestOwnerError):
        await workflow.cancel_by_requester(request.id, bob)

    cancelled = await workflow.cancel_by_requester(request.id, alice)
    assert cancelled.status == RequestStatus.CANCELLED
    assert cancelled.decline_reason == CANCEL_REASON

    with pytest.raises(BorrowRequestStateError):
        await workflow.cancel_by_requester(request.id, alice)
    with pytest.raises(BorrowRequestStateError):
        await workflow.approve(request.id, admin)


@pytest.mark.asyncio
async def test_cancel_rejected_once_approved(workflow, admin, alice, asset):
    request = await workflow.create(alice, asset.id)
    await workflow.approve(request.id, admin)

    with pytest.raises(BorrowRequestStateError):
        await workflow.cancel_by_requester(request.id, alice)


@pytest.mark.asyncio
async def test_complete_only_by_owner_once_approved(workflow, session_factory, settings, admin, alice, bob, asset):
    request = await workflow.create(alice, asset.id)

    with pytest.raises(BorrowRequestStateError):
        await workflow.complete_by_requester(request.id, alice)

    await workflow.approve(request.id, admin)
    with pytest.raises(NotRequestOwnerError):
        await workflow.complete_by_requester(request.id, bob)
    assert await _asset_status(session_factory, settings, asset.id) == AssetStatus.IN_USE

    await workflow.complete_by_requester(request.id, alice)
    with pytest.raises(BorrowRequestStateError):
        await workflow.complete_by_requester(request.id, alice)


@pytest.mark.asyncio
async def test_unknown_request_is_not_found(workflow, admin, alice):
    with pytest.raises(BorrowRequestNotFoundError):
        await workflow.approve("missing", admin)
    with pytest.raises(BorrowRequestNotFoundError):
        await workflow.decline("missing", admin)
    with pytest.raises(BorrowRequestNotFoundError):
        await workflow.cancel_by_requester("missing", alice)
    with pytest.raises(BorrowRequestNotFoundError):
        await workflow.complete_by_requester("missing", alice)
    with pytest.raises(BorrowRequestNotFoundError):
        await workflow.get("missing")


@pytest.mark.asyncio
async def test_listing_by_status_and_requester(workflow, admin, alice, bob, asset):
    first = await workflow.create(alice, asset.id)
    second = await workflow.create(bob, asset.id)
    await workflow.decline(second.id, admin)

    assert [request.id for request in await workflow.list_pending()] == [first.id]
    assert [request.id for request in await workflow.list_by_status("declined")] == [second.id]
    assert [request.id for request in await workflow.list_by_requester(alice.id)] == [first.id]

    with pytest.raises(ValidationError):
        await workflow.list_by_status("LOST")


@pytest.mark.asyncio
async def test_current_borrower_follows_the_holder(workflow, session_factory, settings, admin, alice, asset):
    request = await workflow.create(alice, asset.id)

    async with session_factory() as session:
        assert await AssetRegistry.with_session(session, settings).current_borrower(asset.id) is None

    await workflow.approve(request.id, admin)
    async with session_factory() as session:
        borrower = await AssetRegistry.with_session(session, settings).current_borrower(asset.id)
    assert borrower is not None
    assert borrower.id == alice.id
    assert borrower.username == "alice"

    await workflow.complete_by_requester(request.id, alice)
    async with session_factory() as session:
        assert await AssetRegistry.with_session(session, settings).current_borrower(asset.id) is None


async def _audit_actions(session_factory, settings, action_type):
    async with session_factory() as session:
        return await AuditTrail.with_session(session, settings).by_action_type(action_type)


@pytest.mark.asyncio
async def test_storage_failure_during_approve_rolls_back_everything(
    monkeypatch, workflow, session_factory, settings, admin, alice, asset
):
    request = await workflow.create(alice, asset.id)

    async def broken_append(self, **kwargs):
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(TransactionLedger, "append", broken_append)

    with pytest.raises(RuntimeError):
        await workflow.approve(request.id, admin)

    monkeypatch.undo()
    assert (await workflow.get(request.id)).status == RequestStatus.PENDING
    async with session_factory() as session:
        unchanged = await AssetRegistry.with_session(session, settings).get(asset.id)
    assert unchanged.status == AssetStatus.AVAILABLE
    assert unchanged.current_holder_id is None
    actions = [entry.action for entry in await _ledger(session_factory, asset.id)]
    assert TransactionAction.IN_USE not in actions
    assert await _audit_actions(session_factory, settings, "BORROW APPROVED") == []

    # the request is still decidable once storage recovers
    assert (await workflow.approve(request.id, admin)).status == RequestStatus.APPROVED


@pytest.mark.asyncio
async def test_storage_failure_during_decline_rolls_back_everything(
    monkeypatch, workflow, session_factory, settings, admin, alice, asset
):
    request = await workflow.create(alice, asset.id)

    async def broken_get(self, asset_id):
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(SqlAssetRepository, "get", broken_get)

    with pytest.raises(RuntimeError):
        await workflow.decline(request.id, admin, reason="not today")

    monkeypatch.undo()
    current = await workflow.get(request.id)
    assert current.status == RequestStatus.PENDING
    assert current.decline_reason is None
    assert current.processed_by_id is None
    assert await _audit_actions(session_factory, settings, "BORROW DECLINED") == []
    assert await workflow.has_active_or_pending(alice.id, asset.id) is True


@pytest.mark.asyncio
@pytest.mark.parametrize("decide", ["approve", "decline"])
async def test_decision_requires_existing_admin_account(
    workflow, session_factory, settings, alice, asset, decide
):
    request = await workflow.create(alice, asset.id)
    ghost_admin = Identity(id="ghost-admin", username="ghost", role=Role.ADMIN)

    with pytest.raises(AccountNotFoundError):
        await getattr(workflow, decide)(request.id, ghost_admin)

    assert (await workflow.get(request.id)).status == RequestStatus.PENDING
    assert await _asset_status(session_factory, settings, asset.id) == AssetStatus.AVAILABLE
