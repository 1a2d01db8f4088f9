"""Repository protocol for audit entries."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from inventory_app.db.models import AuditEntry as AuditEntryModel


class AuditRepository(Protocol):
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
    ) -> AuditEntryModel:
        ...

    async def list_entries(
        self,
        *,
        performed_by: str | None,
        action_type: str | None,
        limit: int,
        offset: int,
    ) -> Sequence[AuditEntryModel]:
        ...
