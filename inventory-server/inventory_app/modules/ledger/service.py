"""Transaction ledger service.

Append is the only mutator. Records are never edited or reordered; the ledger
for an asset, read in ``(transaction_date, id)`` order, is the authoritative
history of its status changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import AssetTransaction as AssetTransactionModel
from inventory_app.infrastructure.database.repositories.transaction_repository import SqlTransactionRepository
from inventory_app.modules.common.exceptions import ValidationError
from inventory_app.modules.common.identity import Identity
from inventory_app.modules.common.utils import parse_enum, utcnow

from .exceptions import TransactionNotFoundError
from .models import TransactionAction, TransactionRecord
from .repository import TransactionRepository

MAX_NOTES_LENGTH = 500


@dataclass(slots=True)
class TransactionLedger:
    repository: TransactionRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionLedger":
        return cls(SqlTransactionRepository(session))

    async def append(
        self,
        *,
        asset_id: str,
        actor: Identity,
        action: TransactionAction | str,
        notes: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> TransactionRecord:
        action = parse_enum(TransactionAction, action, ValidationError)
        if notes is not None and len(notes) > MAX_NOTES_LENGTH:
            notes = notes[:MAX_NOTES_LENGTH]
        model = await self.repository.add(
            asset_id=asset_id,
            user_id=actor.id,
            action=action.value,
            transaction_date=timestamp or utcnow(),
            notes=notes,
        )
        return self._to_domain(model)

    async def get(self, record_id: int) -> TransactionRecord:
        model = await self.repository.get(record_id)
        if model is None:
            raise TransactionNotFoundError(record_id)
        return self._to_domain(model)

    async def latest_for(self, asset_id: str) -> TransactionRecord | None:
        model = await self.repository.latest_for_asset(asset_id)
        return self._to_domain(model) if model else None

    async def list_for_asset(self, asset_id: str) -> list[TransactionRecord]:
        rows = await self.repository.search(asset_id=asset_id, user_id=None, action=None, limit=None, offset=0)
        return [self._to_domain(row) for row in rows]

    async def list_for_user(self, user_id: str) -> list[TransactionRecord]:
        rows = await self.repository.search(asset_id=None, user_id=user_id, action=None, limit=None, offset=0)
        return [self._to_domain(row) for row in rows]

    async def search(
        self,
        *,
        asset_id: Optional[str] = None,
        user_id: Optional[str] = None,
        action: TransactionAction | str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[TransactionRecord]:
        action_value = parse_enum(TransactionAction, action, ValidationError).value if action else None
        rows = await self.repository.search(
            asset_id=asset_id,
            user_id=user_id,
            action=action_value,
            limit=limit,
            offset=offset,
        )
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: AssetTransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=int(model.id),
            asset_id=model.asset_id,
            user_id=model.user_id,
            action=TransactionAction(model.action),
            transaction_date=model.transaction_date,
            notes=model.notes,
        )
