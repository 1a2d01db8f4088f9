"""SQLAlchemy repository for audit entries."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.models import AuditEntry


class SqlAuditRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        entity_name: str,
        entity_id: str,
        action_type: str,
        old_value: str | None,
        new_value: str | None,
        performed_by: str,
        performed_at: datetime,
    ) -> AuditEntry:
        model = AuditEntry(
            entity_name=entity_name,
            entity_id=entity_id,
            action_type=action_type,
            old_value=old_value,
            new_value=new_value,
            performed_by=performed_by,
            performed_at=performed_at,
        )
        self._session.add(model)
        await self._session.flush()
        return model

    async def list_entries(
        self,
        *,
        performed_by: str | None,
        action_type: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[AuditEntry]:
        stmt = select(AuditEntry)
        if performed_by:
            stmt = stmt.where(AuditEntry.performed_by == performed_by)
        if action_type:
            stmt = stmt.where(AuditEntry.action_type == action_type)
        stmt = stmt.order_by(AuditEntry.performed_at.desc(), AuditEntry.id.desc()).offset(offset).limit(limit)
        result = await self._session.execute(stmt)
        return result.scalars().all()
