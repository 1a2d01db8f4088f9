"""Report value objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from inventory_app.modules.audit.models import AuditEntry


@dataclass(slots=True)
class AssetSummary:
    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class Dashboard:
    total_assets: int
    total_users: int
    total_transactions: int
    recent_audits: list[AuditEntry] = field(default_factory=list)
