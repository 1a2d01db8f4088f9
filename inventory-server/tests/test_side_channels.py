"""Audit and notification failures must never affect the workflow outcome."""

from __future__ import annotations

import pytest
from sqlalchemy import text

from inventory_app.core.config import AuditSettings, NotificationSettings
from inventory_app.modules.accounts import AccountService
from inventory_app.modules.audit import AuditTrail
from inventory_app.modules.borrowing import BorrowWorkflowEngine, RequestStatus
from inventory_app.modules.common.identity import Role
from inventory_app.modules.ledger import TransactionAction, TransactionLedger
from inventory_app.modules.notifications import NotificationDispatcher, NotificationNotFoundError


class ExplodingAuditRepository:
    """Issues a statement the database rejects, inside the caller's transaction."""

    def __init__(self, session) -> None:
        self._session = session

    async def add(self, **values):
        await self._session.execute(text("INSERT INTO no_such_table (id) VALUES (1)"))

    async def list_entries(self, **filters):
        return []


class ExplodingNotificationRepository:
    async def add(self, **values):
        raise RuntimeError("notification store is down")


def _failing_audit(session):
    return AuditTrail(ExplodingAuditRepository(session), session=session)


def _failing_notifier(session):
    return NotificationDispatcher(ExplodingNotificationRepository())


@pytest.mark.asyncio
async def test_audit_failure_does_not_roll_back_approval(session_factory, settings, admin, alice, asset):
    workflow = BorrowWorkflowEngine(session_factory, settings, audit_factory=_failing_audit)
    request = await workflow.create(alice, asset.id)

    approved = await workflow.approve(request.id, admin)

    assert approved.status == RequestStatus.APPROVED
    assert (await workflow.get(request.id)).status == RequestStatus.APPROVED
    async with session_factory() as session:
        latest = await TransactionLedger.with_session(session).latest_for(asset.id)
    assert latest.action == TransactionAction.IN_USE


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_creation(session_factory, settings, alice, asset):
    workflow = BorrowWorkflowEngine(session_factory, settings, notifier_factory=_failing_notifier)

    request = await workflow.create(alice, asset.id)

    assert (await workflow.get(request.id)).status == RequestStatus.PENDING


@pytest.mark.asyncio
async def test_admins_are_notified_of_new_requests(workflow, session_factory, admin, alice, asset):
    request = await workflow.create(alice, asset.id)

    async with session_factory() as session:
        dispatcher = NotificationDispatcher.with_session(session)
        inbox = await dispatcher.list_for_recipient(admin.id)
        assert await dispatcher.unread_count(admin.id) == 1
        assert await dispatcher.list_for_recipient(alice.id) == []
    assert inbox[0].message == f"New borrow request ({request.id}) for asset: Laptop 01"


@pytest.mark.asyncio
async def test_requester_is_told_about_decisions(workflow, session_factory, admin, alice, asset):
    request = await workflow.create(alice, asset.id)
    await workflow.decline(request.id, admin, reason="asset needed elsewhere")

    async with session_factory() as session:
        inbox = await NotificationDispatcher.with_session(session).list_for_recipient(alice.id)
    assert len(inbox) == 1
    assert "DECLINED" in inbox[0].message
    assert inbox[0].message.endswith("Reason: asset needed elsewhere")


@pytest.mark.asyncio
async def test_notifications_can_be_switched_off(session_factory, settings, admin, alice, asset):
    quiet = settings.model_copy(update={"notifications": NotificationSettings(enabled=False)})
    workflow = BorrowWorkflowEngine(session_factory, quiet)

    await workflow.create(alice, asset.id)

    async with session_factory() as session:
        assert await NotificationDispatcher.with_session(session).unread_count(admin.id) == 0


@pytest.mark.asyncio
async def test_mark_read_is_scoped_to_the_recipient(workflow, session_factory, admin, alice, asset):
    await workflow.create(alice, asset.id)
    async with session_factory.begin() as session:
        dispatcher = NotificationDispatcher.with_session(session)
        (notification,) = await dispatcher.list_for_recipient(admin.id)

        with pytest.raises(NotificationNotFoundError):
            await dispatcher.mark_read(notification.id, recipient_id=alice.id)

        read = await dispatcher.mark_read(notification.id, recipient_id=admin.id)
        assert read.is_read is True
        assert await dispatcher.unread_count(admin.id) == 0
        assert await dispatcher.list_for_recipient(admin.id, unread_only=True) == []


@pytest.mark.asyncio
async def test_audit_records_workflow_actions(workflow, session_factory, settings, admin, alice, asset):
    request = await workflow.create(alice, asset.id)
    await workflow.approve(request.id, admin)

    async with session_factory() as session:
        trail = AuditTrail.with_session(session, settings)
        approvals = await trail.by_action_type("BORROW APPROVED")
        by_alice = await trail.by_performer("alice")
        recent = await trail.recent(limit=10)

    assert len(approvals) == 1
    assert approvals[0].entity_name == "BorrowRequest"
    assert approvals[0].entity_id == request.id
    assert approvals[0].performed_by == "admin"
    assert '"status": "PENDING"' in approvals[0].old_value
    assert '"status": "APPROVED"' in approvals[0].new_value
    assert [entry.action_type for entry in by_alice] == ["BORROW REQUEST"]
    # asset CREATE from the fixture plus the two workflow entries
    assert len(recent) == 3


@pytest.mark.asyncio
async def test_audit_defaults_and_truncation(session_factory, settings, admin):
    async with session_factory.begin() as session:
        trail = AuditTrail.with_session(session, settings)
        unnamed = await trail.log(admin, "CREATE", "", "42")
        long_name = await trail.log(None, "UPDATE", "X" * 150, 7)

    assert unnamed.entity_name == "Unknown Entity"
    assert unnamed.performed_by == "admin"
    assert len(long_name.entity_name) == 100
    assert long_name.entity_id == "7"
    assert long_name.performed_by == "UNKNOWN"


@pytest.mark.asyncio
async def test_disabled_audit_writes_nothing(session_factory, settings, admin):
    silent = settings.model_copy(update={"audit": AuditSettings(enabled=False)})
    async with session_factory.begin() as session:
        trail = AuditTrail.with_session(session, silent)
        assert await trail.log(admin, "CREATE", "Asset", "1") is None
        assert await trail.recent() == []


@pytest.mark.asyncio
async def test_admin_lookup_ignores_other_roles(session_factory, admin, alice, bob):
    async with session_factory() as session:
        admins = await AccountService.with_session(session).list_by_role(Role.ADMIN)
    assert [account.id for account in admins] == [admin.id]
