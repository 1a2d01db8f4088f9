"""Borrow workflow engine.

The engine is the only writer of borrow request status and the only path that
moves an asset into or out of IN_USE through borrowing. Every operation runs in
its own unit of work: the request transition, the asset transition, the ledger
entry and the audit entry commit or roll back together. Transitions are
compare-and-set updates, so a request that was decided concurrently yields a
Conflict instead of a second write.

Notifications are dispatched after the commit in a separate session and never
affect the outcome of the operation.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from inventory_app.core.config import Settings, get_settings
from inventory_app.db.models import BorrowRequest as BorrowRequestModel
from inventory_app.infrastructure.database.session import write_session
from inventory_app.infrastructure.database.repositories.asset_repository import SqlAssetRepository
from inventory_app.infrastructure.database.repositories.borrow_request_repository import SqlBorrowRequestRepository
from inventory_app.modules.accounts.service import AccountService
from inventory_app.modules.assets.exceptions import AssetNotFoundError
from inventory_app.modules.assets.models import AssetStatus
from inventory_app.modules.audit import AuditTrail
from inventory_app.modules.common.exceptions import ValidationError
from inventory_app.modules.common.identity import Identity, Role
from inventory_app.modules.common.utils import parse_enum, utcnow
from inventory_app.modules.ledger import TransactionAction, TransactionLedger
from inventory_app.modules.notifications import NotificationDispatcher

from .exceptions import (
    AssetUnavailableError,
    BorrowRequestNotFoundError,
    BorrowRequestStateError,
    DuplicateActiveRequestError,
    NotRequestOwnerError,
)
from .models import CANCEL_REASON, BorrowRequest, RequestStatus

logger = logging.getLogger(__name__)

AuditFactory = Callable[[AsyncSession], AuditTrail]
NotifierFactory = Callable[[AsyncSession], NotificationDispatcher]
RecipientResolver = Callable[[AsyncSession], Awaitable[Iterable[str]]]


class BorrowWorkflowEngine:
    """State machine for the asset checkout life cycle."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings | None = None,
        *,
        audit_factory: AuditFactory | None = None,
        notifier_factory: NotifierFactory | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_settings()
        self._audit_factory = audit_factory or (lambda session: AuditTrail.with_session(session, self._settings))
        self._notifier_factory = notifier_factory or NotificationDispatcher.with_session

    async def has_active_or_pending(self, user_id: str, asset_id: str) -> bool:
        """Advisory pre-check; the storage layer enforces the invariant."""
        async with self._session_factory() as session:
            return await SqlBorrowRequestRepository(session).exists_active(asset_id, user_id)

    async def get(self, request_id: str) -> BorrowRequest:
        async with self._session_factory() as session:
            model = await SqlBorrowRequestRepository(session).get(request_id)
            if model is None:
                raise BorrowRequestNotFoundError(request_id)
            return self._to_domain(model)

    async def list_pending(self) -> list[BorrowRequest]:
        return await self.list_by_status(RequestStatus.PENDING)

    async def list_by_status(self, status: RequestStatus | str) -> list[BorrowRequest]:
        status = parse_enum(RequestStatus, status, ValidationError)
        async with self._session_factory() as session:
            rows = await SqlBorrowRequestRepository(session).list_by_status(status.value)
            return [self._to_domain(row) for row in rows]

    async def list_by_requester(self, requester_id: str) -> list[BorrowRequest]:
        async with self._session_factory() as session:
            rows = await SqlBorrowRequestRepository(session).list_by_requester(requester_id)
            return [self._to_domain(row) for row in rows]

    async def create(self, requester: Identity, asset_id: str, note: Optional[str] = None) -> BorrowRequest:
        async with write_session(self._session_factory) as session:
            await AccountService.with_session(session).require(requester.id)
            asset = await SqlAssetRepository(session).get(asset_id)
            if asset is None:
                raise AssetNotFoundError(asset_id)

            requests = SqlBorrowRequestRepository(session)
            if await requests.exists_active(asset_id, requester.id):
                raise DuplicateActiveRequestError(asset_id, requester.id)
            try:
                model = await requests.add(
                    asset_id=asset_id,
                    requester_id=requester.id,
                    note=note,
                    created_at=utcnow(),
                )
            except IntegrityError as exc:
                raise DuplicateActiveRequestError(asset_id, requester.id) from exc
            created = self._to_domain(model)
            await self._audit_factory(session).log(
                requester, "BORROW REQUEST", "BorrowRequest", created.id, None, created
            )
            asset_name = asset.name

        logger.info("Borrow request %s created by %s for asset %s", created.id, requester.username, asset_id)
        await self._dispatch(
            self._admin_ids,
            f"New borrow request ({created.id}) for asset: {asset_name}",
        )
        return created

    async def approve(self, request_id: str, admin: Identity) -> BorrowRequest:
        async with write_session(self._session_factory) as session:
            requests = SqlBorrowRequestRepository(session)
            model = await self._require(requests, request_id, for_update=True)
            await AccountService.with_session(session).require(admin.id)
            before = self._to_domain(model)
            self._check_status(before, RequestStatus.PENDING)
            requester = (await AccountService.with_session(session).require(before.requester_id)).identity()

            now = utcnow()
            updated = await requests.transition(
                request_id,
                expected=RequestStatus.PENDING.value,
                status=RequestStatus.APPROVED.value,
                processed_by_id=admin.id,
                processed_at=now,
            )
            if updated is None:
                await self._raise_lost_race(requests, request_id, RequestStatus.PENDING)
            approved = self._to_domain(updated)

            asset = await SqlAssetRepository(session).transition_status(
                approved.asset_id,
                expected=AssetStatus.AVAILABLE.value,
                status=AssetStatus.IN_USE.value,
                holder_id=requester.id,
                updated_at=now,
            )
            if asset is None:
                raise AssetUnavailableError(f"asset {approved.asset_id} is not AVAILABLE")

            await TransactionLedger.with_session(session).append(
                asset_id=approved.asset_id,
                actor=requester,
                action=TransactionAction.IN_USE,
                notes=f"Approved borrow request id: {approved.id}",
                timestamp=now,
            )
            await self._audit_factory(session).log(
                admin, "BORROW APPROVED", "BorrowRequest", approved.id, before, approved
            )
            asset_name = asset.name

        logger.info("Borrow request %s approved by %s", approved.id, admin.username)
        await self._dispatch(
            self._recipient(approved.requester_id),
            f"Your borrow request ({approved.id}) for asset '{asset_name}' has been APPROVED.",
        )
        return approved

    async def decline(self, request_id: str, admin: Identity, reason: Optional[str] = None) -> BorrowRequest:
        async with write_session(self._session_factory) as session:
            requests = SqlBorrowRequestRepository(session)
            model = await self._require(requests, request_id, for_update=True)
            await AccountService.with_session(session).require(admin.id)
            before = self._to_domain(model)
            self._check_status(before, RequestStatus.PENDING)

            updated = await requests.transition(
                request_id,
                expected=RequestStatus.PENDING.value,
                status=RequestStatus.DECLINED.value,
                processed_by_id=admin.id,
                processed_at=utcnow(),
                decline_reason=reason,
            )
            if updated is None:
                await self._raise_lost_race(requests, request_id, RequestStatus.PENDING)
            declined = self._to_domain(updated)
            await self._audit_factory(session).log(
                admin, "BORROW DECLINED", "BorrowRequest", declined.id, before, declined
            )
            asset = await SqlAssetRepository(session).get(declined.asset_id)
            asset_name = asset.name if asset else declined.asset_id

        logger.info("Borrow request %s declined by %s", declined.id, admin.username)
        message = f"Your borrow request ({declined.id}) for asset '{asset_name}' has been DECLINED."
        if reason:
            message += f" Reason: {reason}"
        await self._dispatch(self._recipient(declined.requester_id), message)
        return declined

    async def cancel_by_requester(self, request_id: str, requester: Identity) -> BorrowRequest:
        async with write_session(self._session_factory) as session:
            requests = SqlBorrowRequestRepository(session)
            model = await self._require(requests, request_id, for_update=True)
            before = self._to_domain(model)
            if before.requester_id != requester.id:
                raise NotRequestOwnerError(request_id)
            self._check_status(before, RequestStatus.PENDING)

            updated = await requests.transition(
                request_id,
                expected=RequestStatus.PENDING.value,
                status=RequestStatus.CANCELLED.value,
                processed_by_id=requester.id,
                processed_at=utcnow(),
                decline_reason=CANCEL_REASON,
            )
            if updated is None:
                await self._raise_lost_race(requests, request_id, RequestStatus.PENDING)
            cancelled = self._to_domain(updated)
            await self._audit_factory(session).log(
                requester, "BORROW CANCELLED", "BorrowRequest", cancelled.id, before, cancelled
            )

        logger.info("Borrow request %s cancelled by %s", cancelled.id, requester.username)
        return cancelled

    async def complete_by_requester(self, request_id: str, requester: Identity) -> BorrowRequest:
        async with write_session(self._session_factory) as session:
            requests = SqlBorrowRequestRepository(session)
            model = await self._require(requests, request_id, for_update=True)
            before = self._to_domain(model)
            if before.requester_id != requester.id:
                raise NotRequestOwnerError(request_id)
            self._check_status(before, RequestStatus.APPROVED)

            now = utcnow()
            updated = await requests.transition(
                request_id,
                expected=RequestStatus.APPROVED.value,
                status=RequestStatus.COMPLETE.value,
                completed_at=now,
            )
            if updated is None:
                await self._raise_lost_race(requests, request_id, RequestStatus.APPROVED)
            completed = self._to_domain(updated)

            returned = await SqlAssetRepository(session).transition_status(
                completed.asset_id,
                expected=AssetStatus.IN_USE.value,
                status=AssetStatus.AVAILABLE.value,
                holder_id=None,
                updated_at=now,
                expected_holder_id=requester.id,
            )
            if returned is None:
                logger.warning(
                    "Asset %s was no longer held by %s when request %s completed; status left unchanged",
                    completed.asset_id,
                    requester.username,
                    completed.id,
                )

            await TransactionLedger.with_session(session).append(
                asset_id=completed.asset_id,
                actor=requester,
                action=TransactionAction.RETURN,
                notes=f"Returned asset for borrow request id: {completed.id}",
                timestamp=now,
            )
            await self._audit_factory(session).log(
                requester, "BORROW COMPLETE", "BorrowRequest", completed.id, before, completed
            )

        logger.info("Borrow request %s completed by %s", completed.id, requester.username)
        return completed

    @staticmethod
    async def _require(
        requests: SqlBorrowRequestRepository,
        request_id: str,
        *,
        for_update: bool = False,
    ) -> BorrowRequestModel:
        model = await requests.get(request_id, for_update=for_update)
        if model is None:
            raise BorrowRequestNotFoundError(request_id)
        return model

    @staticmethod
    def _check_status(request: BorrowRequest, expected: RequestStatus) -> None:
        if request.status != expected:
            raise BorrowRequestStateError(request.id, request.status.value, expected.value)

    @staticmethod
    async def _raise_lost_race(
        requests: SqlBorrowRequestRepository,
        request_id: str,
        expected: RequestStatus,
    ) -> None:
        current = await requests.get(request_id)
        status = current.status if current is not None else "MISSING"
        raise BorrowRequestStateError(request_id, status, expected.value)

    @staticmethod
    async def _admin_ids(session: AsyncSession) -> list[str]:
        admins = await AccountService.with_session(session).list_by_role(Role.ADMIN)
        return [admin.id for admin in admins]

    @staticmethod
    def _recipient(recipient_id: str) -> RecipientResolver:
        async def resolve(_: AsyncSession) -> Sequence[str]:
            return [recipient_id]

        return resolve

    async def _dispatch(self, resolve: RecipientResolver, message: str) -> None:
        if not self._settings.notifications.enabled:
            return
        try:
            async with write_session(self._session_factory) as session:
                recipients = list(await resolve(session))
                if recipients:
                    await self._notifier_factory(session).notify_many(recipients, message)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to dispatch notification: %s", message)

    @staticmethod
    def _to_domain(model: BorrowRequestModel) -> BorrowRequest:
        return BorrowRequest(
            id=model.id,
            asset_id=model.asset_id,
            requester_id=model.requester_id,
            status=RequestStatus(model.status),
            created_at=model.created_at,
            note=model.note,
            processed_by_id=model.processed_by_id,
            processed_at=model.processed_at,
            decline_reason=model.decline_reason,
            completed_at=model.completed_at,
        )
