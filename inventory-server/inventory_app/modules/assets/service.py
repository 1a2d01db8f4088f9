"""Asset registry service.

Owns asset records and their availability status. Every status change made
here appends a ledger entry and an audit record in the caller's transaction.
Moving an asset *into* IN_USE is reserved for the borrow workflow, which also
sets the current holder.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.config import Settings
from inventory_app.db.models import Asset as AssetModel
from inventory_app.infrastructure.database.repositories.asset_repository import SqlAssetRepository
from inventory_app.modules.audit import AuditTrail
from inventory_app.modules.categories.exceptions import CategoryNotFoundError
from inventory_app.modules.common.identity import Identity
from inventory_app.modules.common.utils import parse_enum, utcnow
from inventory_app.modules.ledger import TransactionAction, TransactionLedger, action_for_status

from .exceptions import AssetAlreadyExistsError, AssetInUseError, AssetNotFoundError, AssetValidationError
from .models import Asset, AssetCreateInput, AssetPage, AssetStatus, AssetUpdateInput, Borrower, UNSET
from .repository import AssetRepository

logger = logging.getLogger(__name__)

SERIAL_PATTERN = re.compile(r"^[A-Z0-9-]+$")


@dataclass(slots=True)
class AssetRegistry:
    repository: AssetRepository
    ledger: TransactionLedger
    audit: AuditTrail

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "AssetRegistry":
        return cls(
            SqlAssetRepository(session),
            TransactionLedger.with_session(session),
            AuditTrail.with_session(session, settings),
        )

    async def get(self, asset_id: str) -> Asset:
        model = await self._require(asset_id)
        usernames = await self.repository.usernames_for([model.current_holder_id])
        return self._to_domain(model, usernames)

    async def list_assets(
        self,
        *,
        status: AssetStatus | str | None = None,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> AssetPage:
        status_value = parse_enum(AssetStatus, status, AssetValidationError).value if status else None
        models, total = await self.repository.search(
            status=status_value,
            category_id=category_id,
            text=search,
            limit=limit,
            offset=offset,
        )
        usernames = await self.repository.usernames_for([model.current_holder_id for model in models])
        return AssetPage(total=total, items=[self._to_domain(model, usernames) for model in models])

    async def find_assets_by_category(self, category_id: str) -> list[Asset]:
        models, _ = await self.repository.search(
            status=None,
            category_id=category_id,
            text=None,
            limit=None,
            offset=0,
        )
        return [self._to_domain(model) for model in models]

    async def create(self, actor: Identity, payload: AssetCreateInput) -> Asset:
        status = parse_enum(AssetStatus, payload.status, AssetValidationError)
        if status == AssetStatus.IN_USE:
            raise AssetValidationError("assets enter IN_USE only through an approved borrow request")
        self._validate_fields(
            name=payload.name,
            serial_number=payload.serial_number,
            cost=payload.cost,
            purchase_date=payload.purchase_date,
        )
        await self._ensure_unique(payload.name, payload.serial_number)
        if not await self.repository.category_exists(payload.category_id):
            raise CategoryNotFoundError(payload.category_id)

        now = utcnow()
        try:
            model = await self.repository.add(
                name=payload.name,
                serial_number=payload.serial_number,
                category_id=payload.category_id,
                status=status.value,
                cost=payload.cost,
                purchase_date=payload.purchase_date,
                image_url=payload.image_url,
                created_at=now,
                updated_at=now,
            )
        except IntegrityError as exc:
            raise self._conflict(payload.name, payload.serial_number) from exc
        created = self._to_domain(model)

        await self.ledger.append(
            asset_id=created.id,
            actor=actor,
            action=TransactionAction.CREATE,
            notes=f"Created new asset {created.name}",
            timestamp=now,
        )
        await self.audit.log(actor, "CREATE", "Asset", created.id, None, created)
        return created

    async def update(self, actor: Identity, asset_id: str, payload: AssetUpdateInput) -> Asset:
        model = await self._require(asset_id)
        before = self._to_domain(model)

        name = payload.name if payload.name is not UNSET else model.name
        serial_number = payload.serial_number if payload.serial_number is not UNSET else model.serial_number
        cost = payload.cost if payload.cost is not UNSET else model.cost
        purchase_date = payload.purchase_date if payload.purchase_date is not UNSET else model.purchase_date
        status = (
            parse_enum(AssetStatus, payload.status, AssetValidationError)
            if payload.status is not UNSET and payload.status is not None
            else before.status
        )
        if status == AssetStatus.IN_USE and before.status != AssetStatus.IN_USE:
            raise AssetValidationError("assets enter IN_USE only through an approved borrow request")

        self._validate_fields(name=name, serial_number=serial_number, cost=cost, purchase_date=purchase_date)
        await self._ensure_unique(name, serial_number, exclude_id=asset_id)

        if payload.category_id is not UNSET and payload.category_id:
            if not await self.repository.category_exists(payload.category_id):
                raise CategoryNotFoundError(payload.category_id)
            model.category_id = payload.category_id

        now = utcnow()
        model.name = name
        model.serial_number = serial_number
        model.cost = cost
        model.purchase_date = purchase_date
        if payload.image_url is not UNSET:
            model.image_url = payload.image_url
        model.status = status.value
        if status != AssetStatus.IN_USE:
            model.current_holder_id = None
        model.updated_at = now
        try:
            updated = self._to_domain(await self.repository.save(model))
        except IntegrityError as exc:
            raise self._conflict(name, serial_number) from exc

        if updated.status != before.status:
            await self.ledger.append(
                asset_id=updated.id,
                actor=actor,
                action=action_for_status(updated.status),
                notes=f"Updated asset {updated.name}: {before.status.value} -> {updated.status.value}",
                timestamp=now,
            )
        await self.audit.log(actor, "UPDATE", "Asset", updated.id, before, updated)
        return updated

    async def soft_retire(self, actor: Identity, asset_id: str) -> Asset:
        model = await self._require(asset_id)
        before = self._to_domain(model)
        if before.status == AssetStatus.RETIRED:
            return before

        now = utcnow()
        model.status = AssetStatus.RETIRED.value
        model.current_holder_id = None
        model.updated_at = now
        retired = self._to_domain(await self.repository.save(model))

        await self.ledger.append(
            asset_id=retired.id,
            actor=actor,
            action=action_for_status(retired.status),
            notes=f"Archived asset {retired.name}",
            timestamp=now,
        )
        await self.audit.log(actor, "ARCHIVE", "Asset", retired.id, before, retired)
        return retired

    async def hard_delete(self, actor: Identity, asset_id: str) -> None:
        """Remove the asset row. Distinct from :meth:`soft_retire`."""
        model = await self._require(asset_id)
        existing = self._to_domain(model)
        references = await self.repository.count_borrow_requests(asset_id)
        if references:
            raise AssetInUseError(
                f"asset {asset_id} is referenced by {references} borrow request(s); retire it instead"
            )

        await self.ledger.append(
            asset_id=existing.id,
            actor=actor,
            action=TransactionAction.RETIRE,
            notes=f"Deleted asset {existing.name}",
        )
        await self.repository.delete(asset_id)
        await self.audit.log(actor, "DELETE", "Asset", existing.id, existing, None)
        logger.info("Asset %s (%s) deleted by %s", existing.id, existing.name, actor.username)

    async def current_borrower(self, asset_id: str) -> Borrower | None:
        """Holder of the asset while it is IN_USE, otherwise ``None``."""
        asset = await self.get(asset_id)
        return asset.borrowed_by

    async def _require(self, asset_id: str) -> AssetModel:
        model = await self.repository.get(asset_id)
        if model is None:
            raise AssetNotFoundError(asset_id)
        return model

    async def _ensure_unique(self, name: str, serial_number: str, exclude_id: Optional[str] = None) -> None:
        by_name = await self.repository.get_by_name(name)
        if by_name is not None and by_name.id != exclude_id:
            raise AssetAlreadyExistsError(f"asset name already exists: {name}")
        by_serial = await self.repository.get_by_serial(serial_number)
        if by_serial is not None and by_serial.id != exclude_id:
            raise AssetAlreadyExistsError(
                f"serial number {serial_number} already belongs to asset {by_serial.id}"
            )

    @staticmethod
    def _conflict(name: str, serial_number: str) -> AssetAlreadyExistsError:
        # a concurrent writer claimed the name or serial after _ensure_unique ran
        return AssetAlreadyExistsError(f"asset name {name} or serial number {serial_number} already exists")

    @staticmethod
    def _validate_fields(
        *,
        name: str,
        serial_number: str,
        cost: Optional[Decimal],
        purchase_date: Optional[date],
    ) -> None:
        if not name or not 2 <= len(name.strip()) <= 100:
            raise AssetValidationError("name must be between 2 and 100 characters")
        if not serial_number or not SERIAL_PATTERN.match(serial_number):
            raise AssetValidationError("serial number may contain only uppercase letters, digits and hyphens")
        if cost is not None and Decimal(cost) <= 0:
            raise AssetValidationError("cost must be positive")
        if purchase_date is not None and purchase_date > date.today():
            raise AssetValidationError("purchase date cannot be in the future")

    @staticmethod
    def _to_domain(model: AssetModel, usernames: dict[str, str] | None = None) -> Asset:
        status = AssetStatus(model.status)
        borrowed_by = None
        holder_id = model.current_holder_id
        if status == AssetStatus.IN_USE and holder_id and usernames and holder_id in usernames:
            borrowed_by = Borrower(id=holder_id, username=usernames[holder_id])
        return Asset(
            id=model.id,
            name=model.name,
            serial_number=model.serial_number,
            category_id=model.category_id,
            status=status,
            cost=model.cost,
            purchase_date=model.purchase_date,
            image_url=model.image_url,
            current_holder_id=holder_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
            borrowed_by=borrowed_by,
        )
