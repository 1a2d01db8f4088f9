"""Audit trail service.

Writes are best-effort: any failure (serialization, storage) is logged and
swallowed inside a SAVEPOINT so the caller's transaction is never rolled back
or failed by a lost audit entry. Reads are page/filter only.
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.config import Settings, get_settings
from inventory_app.db.models import AuditEntry as AuditEntryModel
from inventory_app.infrastructure.database.repositories.audit_repository import SqlAuditRepository
from inventory_app.modules.common.identity import Identity
from inventory_app.modules.common.utils import snapshot, utcnow

from .models import AuditEntry
from .repository import AuditRepository

logger = logging.getLogger(__name__)

UNKNOWN_PERFORMER = "UNKNOWN"
UNKNOWN_ENTITY = "Unknown Entity"


@dataclass(slots=True)
class AuditTrail:
    repository: AuditRepository
    session: Optional[AsyncSession] = None
    enabled: bool = True
    max_entity_name_length: int = 100

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "AuditTrail":
        settings = settings or get_settings()
        return cls(
            SqlAuditRepository(session),
            session=session,
            enabled=settings.audit.enabled,
            max_entity_name_length=settings.audit.max_entity_name_length,
        )

    async def log(
        self,
        actor: Identity | None,
        action_type: str,
        entity_name: str | None,
        entity_id: Any,
        old_value: Any = None,
        new_value: Any = None,
    ) -> AuditEntry | None:
        if not self.enabled:
            return None
        try:
            name = (entity_name or "").strip() or UNKNOWN_ENTITY
            async with self._savepoint():
                model = await self.repository.add(
                    entity_name=name[: self.max_entity_name_length],
                    entity_id=str(entity_id),
                    action_type=action_type[:50],
                    old_value=snapshot(old_value),
                    new_value=snapshot(new_value),
                    performed_by=actor.username if actor else UNKNOWN_PERFORMER,
                    performed_at=utcnow(),
                )
            return self._to_domain(model)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to write audit entry %s for %s/%s", action_type, entity_name, entity_id)
            return None

    async def recent(self, limit: int = 20, offset: int = 0) -> list[AuditEntry]:
        rows = await self.repository.list_entries(performed_by=None, action_type=None, limit=limit, offset=offset)
        return [self._to_domain(row) for row in rows]

    async def by_performer(self, performed_by: str, limit: int = 100, offset: int = 0) -> list[AuditEntry]:
        rows = await self.repository.list_entries(
            performed_by=performed_by,
            action_type=None,
            limit=limit,
            offset=offset,
        )
        return [self._to_domain(row) for row in rows]

    async def by_action_type(self, action_type: str, limit: int = 100, offset: int = 0) -> list[AuditEntry]:
        rows = await self.repository.list_entries(
            performed_by=None,
            action_type=action_type,
            limit=limit,
            offset=offset,
        )
        return [self._to_domain(row) for row in rows]

    def _savepoint(self):
        if self.session is None:
            return contextlib.nullcontext()
        return self.session.begin_nested()

    @staticmethod
    def _to_domain(model: AuditEntryModel) -> AuditEntry:
        return AuditEntry(
            id=int(model.id),
            entity_name=model.entity_name,
            entity_id=model.entity_id,
            action_type=model.action_type,
            old_value=model.old_value,
            new_value=model.new_value,
            performed_by=model.performed_by,
            performed_at=model.performed_at,
        )
