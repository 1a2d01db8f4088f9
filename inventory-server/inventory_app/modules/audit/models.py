"""Audit entry domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class AuditEntry:
    id: int
    entity_name: str
    entity_id: str
    action_type: str
    old_value: Optional[str]
    new_value: Optional[str]
    performed_by: str
    performed_at: datetime
